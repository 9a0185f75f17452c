"""Apprise notifier: delivers through the Apprise container to any service URL."""

from __future__ import annotations

import dagger

from athame.adapters.tools.apprise import Apprise
from athame.core.domain.models import Notification
from athame.core.errors import NotificationError, ToolError


class AppriseNotifier:
    def __init__(self, client: dagger.Client, service_url: dagger.Secret) -> None:
        self._tool = Apprise(client)
        self._service_url = service_url

    async def send(self, notification: Notification) -> str:
        title = notification.title or notification.topic
        try:
            await self._tool.run(self._tool.send(title, notification.message, self._service_url))
        except ToolError as exc:
            raise NotificationError(f"apprise failed: {exc}") from exc
        return f"Notification sent successfully to {notification.topic}"
