"""ntfy notifier (HTTP POST to `<server>/<topic>`)."""

from __future__ import annotations

import httpx

from athame.adapters.http_client import build_async_client
from athame.core.config import AppSettings
from athame.core.domain.models import Notification
from athame.core.errors import NotificationError


def build_headers(notification: Notification) -> dict[str, str]:
    """ntfy headers; only fields with a value are sent."""

    headers: dict[str, str] = {}
    if notification.title:
        headers["Title"] = notification.title
    if notification.priority:
        headers["Priority"] = notification.priority.value
    if notification.tags:
        headers["Tags"] = ",".join(notification.tags)
    if notification.markdown:
        headers["Markdown"] = "yes"
    if notification.actions:
        headers["Actions"] = notification.actions
    return headers


class NtfyNotifier:
    """Sends notifications to an ntfy server.

    A shared `httpx.AsyncClient` can be injected (tests use a MockTransport);
    otherwise a short-lived client is opened per notification.
    """

    def __init__(self, settings: AppSettings | None = None, *, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings or AppSettings()
        self._client = client

    def url_for(self, notification: Notification) -> str:
        server = (notification.server or self.settings.ntfy_server).rstrip("/")
        return f"{server}/{notification.topic}"

    async def send(self, notification: Notification) -> str:
        url = self.url_for(notification)
        headers = build_headers(notification)
        body = notification.message.encode("utf-8")

        try:
            if self._client is not None:
                response = await self._client.post(url, content=body, headers=headers)
            else:
                async with build_async_client(self.settings) as client:
                    response = await client.post(url, content=body, headers=headers)
        except httpx.HTTPError as exc:
            raise NotificationError(f"failed to send notification: {exc}") from exc

        if not response.is_success:
            raise NotificationError(f"ntfy returned non-success status: {response.status_code}")
        return f"Notification sent successfully to {notification.topic}"
