"""Group chat notifications via the LINE Messaging API push endpoint."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from repairdesk.config import LineConfig
from repairdesk.errors import DependencyError

logger = logging.getLogger(__name__)

# LINE rejects text messages longer than this
MAX_TEXT_LENGTH = 5000


class ChatNotifier(ABC):
    """Pushes a text message to the one configured channel."""

    @abstractmethod
    async def push(self, text: str) -> None:
        ...


class LineNotifier(ChatNotifier):
    def __init__(self, client: httpx.AsyncClient, access_token: str, group_id: str, push_url: str):
        self._client = client
        self.access_token = access_token
        self.group_id = group_id
        self.push_url = push_url

    @classmethod
    def from_config(cls, client: httpx.AsyncClient, config: LineConfig) -> "LineNotifier":
        return cls(client, config.access_token, config.group_id, config.push_url)

    async def push(self, text: str) -> None:
        if not self.access_token or not self.group_id:
            logger.warning("LINE access token or group id not set; message not sent (%d chars)", len(text))
            return

        if len(text) > MAX_TEXT_LENGTH:
            text = text[: MAX_TEXT_LENGTH - 1] + "…"

        try:
            response = await self._client.post(
                self.push_url,
                json={"to": self.group_id, "messages": [{"type": "text", "text": text}]},
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("LINE push failed: %s", e)
            raise DependencyError("Chat notification failed", service="line") from e
