"""Notification channels implementing `athame.core.interfaces.notifier.Notifier`."""

from athame.adapters.notifiers.apprise import AppriseNotifier
from athame.adapters.notifiers.ntfy import NtfyNotifier

__all__ = ["AppriseNotifier", "NtfyNotifier"]
