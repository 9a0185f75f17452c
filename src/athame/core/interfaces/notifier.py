"""Notifier contract.

Notifications are one-way and best-effort: pipelines wrap every call in
`athame.core.services.notify.notify_safely`, so implementations are free to
raise `NotificationError` on failure.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from athame.core.domain.models import Notification


@runtime_checkable
class Notifier(Protocol):
    """Minimal contract for a notification channel."""

    async def send(self, notification: Notification) -> str:
        """Deliver `notification` and return a short confirmation."""

        ...
