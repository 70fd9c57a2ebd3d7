"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from repairdesk.api.workorders import router as workorders_router
from repairdesk.api.configs import router as configs_router
from repairdesk.api.technicians import router as technicians_router
from repairdesk.api.users import router as users_router

api_router = APIRouter()
api_router.include_router(workorders_router)
api_router.include_router(configs_router)
api_router.include_router(technicians_router)
api_router.include_router(users_router)
