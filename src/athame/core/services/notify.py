"""Best-effort notifications.

Notification failures are logged and discarded; they never change the
outcome of a pipeline.
"""

from __future__ import annotations

from loguru import logger

from athame.core.domain.models import Notification, Priority
from athame.core.interfaces.notifier import Notifier

FAILURE_BODY = "Check logs for details."


def started(topic: str, title: str, message: str, *, tags: list[str] | None = None) -> Notification:
    return Notification(
        topic=topic,
        message=message,
        title=title,
        priority=Priority.DEFAULT,
        tags=tags or ["hourglass_flowing_sand"],
    )


def completed(
    topic: str,
    title: str,
    message: str,
    *,
    markdown: bool = False,
    view_url: str | None = None,
    tags: list[str] | None = None,
) -> Notification:
    return Notification(
        topic=topic,
        message=message,
        title=title,
        priority=Priority.DEFAULT,
        tags=tags or ["white_check_mark"],
        markdown=markdown,
        actions=f"view, View Site, {view_url}" if view_url else None,
    )


def failed(topic: str, title: str, message: str = FAILURE_BODY) -> Notification:
    return Notification(
        topic=topic,
        message=message,
        title=title,
        priority=Priority.HIGH,
        tags=["warning"],
    )


async def notify_safely(notifier: Notifier | None, notification: Notification) -> bool:
    """Send `notification`, logging (never raising) on failure."""

    if notifier is None:
        logger.debug("No notifier configured; skipping '{}'", notification.title)
        return False
    try:
        result = await notifier.send(notification)
    except Exception as exc:
        logger.warning("Failed to send notification '{}': {}", notification.title, exc)
        return False
    logger.debug("Notification '{}': {}", notification.title, result)
    return True


def published_message(registry: str, address: str, *, run_hint: bool = False) -> str:
    """Markdown body announcing a published image."""

    body = f"Published to {registry}.\n\n**Image:**\n```\n{address}\n```"
    if run_hint:
        body += f"\n\n**Run:**\n```bash\ndocker run -p 8080:80 {address}\n```"
    return body
