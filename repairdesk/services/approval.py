"""Hand-off of workorder items to the external approval service.

Each item that has both an owner and an approver gets one request carrying
what to approve, who approves it, and the callback URL the service calls
with the decision.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from repairdesk.config import ApprovalConfig
from repairdesk.errors import DependencyError
from repairdesk.services.views import WorkorderView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApprovalRequest:
    item_id: str
    title: str
    detail: str
    comment: str | None
    callback_url: str
    approver_id: str
    owner_id: str

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "detail": self.detail,
            "comment": self.comment,
            "callbackUrl": self.callback_url,
            "approverId": self.approver_id,
            "ownerId": self.owner_id,
        }


class ApprovalGateway(ABC):
    enabled: bool = True

    @abstractmethod
    async def request_approval(self, request: ApprovalRequest) -> None:
        ...


class HttpApprovalGateway(ApprovalGateway):
    def __init__(self, client: httpx.AsyncClient, url: str, api_key: str = ""):
        self._client = client
        self.url = url
        self.api_key = api_key

    @classmethod
    def from_config(cls, client: httpx.AsyncClient, config: ApprovalConfig) -> "HttpApprovalGateway":
        return cls(client, config.url, config.api_key)

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    async def request_approval(self, request: ApprovalRequest) -> None:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        try:
            response = await self._client.post(self.url, json=request.to_payload(), headers=headers)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DependencyError(
                f"Approval request for item {request.item_id} failed",
                service="approval", itemId=request.item_id,
            ) from e


def callback_url(public_base_url: str, item_id: str) -> str:
    return f"{public_base_url.rstrip('/')}/workorder/item/{item_id}/status"


def build_approval_requests(view: WorkorderView, public_base_url: str) -> list[ApprovalRequest]:
    return [
        ApprovalRequest(
            item_id=item.id,
            title=item.category,
            detail=item.detail,
            comment=item.comment,
            callback_url=callback_url(public_base_url, item.id),
            approver_id=item.approver.id,
            owner_id=item.owner.id,
        )
        for item in view.items
        if item.owner and item.approver
    ]


async def dispatch_approvals(gateway: ApprovalGateway, view: WorkorderView, public_base_url: str) -> int:
    """Send every qualifying item concurrently. Returns the number sent.

    All requests are allowed to settle; if any failed, the first failure is
    raised as a DependencyError afterwards.
    """
    if not gateway.enabled:
        logger.warning("Approval service URL not set; skipping dispatch for workorder %s", view.id)
        return 0

    requests = build_approval_requests(view, public_base_url)
    if not requests:
        return 0

    results = await asyncio.gather(
        *(gateway.request_approval(r) for r in requests), return_exceptions=True
    )
    failures = [(r, res) for r, res in zip(requests, results) if isinstance(res, Exception)]
    for r, exc in failures:
        logger.error("Approval dispatch failed for item %s: %s", r.item_id, exc)

    if failures:
        raise DependencyError(
            f"{len(failures)} of {len(requests)} approval requests failed",
            service="approval", failed=len(failures),
        ) from failures[0][1]

    logger.info("Dispatched %d approval requests for workorder %s", len(requests), view.id)
    return len(requests)
