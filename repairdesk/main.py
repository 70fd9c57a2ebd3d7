"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repairdesk.api.router import api_router
from repairdesk.config import get_settings
from repairdesk.db.engine import engine, init_db
from repairdesk.errors import AppError
from repairdesk.logging_config import setup_logging
from repairdesk.services.approval import HttpApprovalGateway
from repairdesk.services.chat import LineNotifier

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()

    # One pooled client for every outbound call (LINE push, approval service)
    client = httpx.AsyncClient(timeout=settings.http_timeout)
    app.state.chat_notifier = LineNotifier.from_config(client, settings.line)
    app.state.approval_gateway = HttpApprovalGateway.from_config(client, settings.approval)
    logger.info("Repair desk API started")
    yield
    await client.aclose()
    await engine.dispose()


app = FastAPI(
    title="Repair Desk",
    description="Repair request intake with per-item approval routing and group chat notifications.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message, **jsonable_encoder(exc.details)},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error"})


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
