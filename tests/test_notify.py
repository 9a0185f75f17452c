from __future__ import annotations

import pytest

from athame.core.domain.models import Priority
from athame.core.services import notify
from tests.fakes import FailingNotifier, RecordingNotifier


@pytest.mark.unit
def test_started_preset():
    n = notify.started("athame", "MkDocs CI/CD Started", "Starting tests...")
    assert n.priority is Priority.DEFAULT
    assert n.tags == ["hourglass_flowing_sand"]
    assert n.actions is None


@pytest.mark.unit
def test_completed_preset_with_view_action():
    n = notify.completed("athame", "Fly.io Deploy Completed", "done", markdown=True, view_url="https://app.fly.dev")
    assert n.tags == ["white_check_mark"]
    assert n.markdown is True
    assert n.actions == "view, View Site, https://app.fly.dev"


@pytest.mark.unit
def test_failed_preset():
    n = notify.failed("athame", "Tests Failed")
    assert n.priority is Priority.HIGH
    assert n.tags == ["warning"]
    assert n.message == "Check logs for details."


@pytest.mark.unit
def test_published_message_run_hint():
    body = notify.published_message("GHCR", "ghcr.io/u/athame/site:latest", run_hint=True)
    assert body.startswith("Published to GHCR.")
    assert "docker run -p 8080:80 ghcr.io/u/athame/site:latest" in body
    assert "docker run" not in notify.published_message("GHCR", "ghcr.io/u/athame/site:latest")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_notify_safely_delivers():
    notifier = RecordingNotifier()
    assert await notify.notify_safely(notifier, notify.started("athame", "T", "m")) is True
    assert notifier.titles == ["T"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_notify_safely_swallows_and_logs(log_messages):
    notifier = FailingNotifier()
    result = await notify.notify_safely(notifier, notify.failed("athame", "Tests Failed"))

    assert result is False
    assert notifier.attempts == 1
    assert any(
        m.startswith("WARNING|Failed to send notification 'Tests Failed'") for m in log_messages
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_notify_safely_without_notifier():
    assert await notify.notify_safely(None, notify.started("athame", "T", "m")) is False
