from __future__ import annotations

import pytest
from loguru import logger

from athame.core.config import AppSettings
from tests.fakes import FakeClient, FakeDirectory, RecordingNotifier


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, ghcr_token="ghp_test")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def source() -> FakeDirectory:
    return FakeDirectory("/repo")


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m)), level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)
