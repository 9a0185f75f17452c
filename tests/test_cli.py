from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
from typer.testing import CliRunner

from athame import __version__
from athame.adapters import engine
from athame.cli import doctor
from athame.cli import main as cli
from athame.core.errors import NotificationError
from tests.fakes import FakeClient

runner = CliRunner()


class _StubNtfy:
    sent: list = []
    fail = False

    def __init__(self, settings=None, **kwargs) -> None:
        pass

    async def send(self, notification) -> str:
        if self.fail:
            raise NotificationError("ntfy returned non-success status: 500")
        _StubNtfy.sent.append(notification)
        return f"Notification sent successfully to {notification.topic}"


@pytest.fixture
def stub_ntfy(monkeypatch):
    _StubNtfy.sent = []
    _StubNtfy.fail = False
    monkeypatch.setattr(cli, "NtfyNotifier", _StubNtfy)
    return _StubNtfy


@pytest.mark.unit
def test_help_lists_pipelines():
    result = runner.invoke(cli.app, ["--help"])
    assert result.exit_code == 0
    for name in ("mkdocs", "go", "miele", "demo", "notify", "scan-image", "digest", "doctor"):
        assert name in result.output


@pytest.mark.unit
def test_version():
    result = runner.invoke(cli.app, ["--no-banner", "version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.unit
def test_notify_sends(stub_ntfy):
    result = runner.invoke(
        cli.app,
        ["notify", "Deploy done", "--title", "Deploy", "--topic", "ops", "--tags", "rocket, tada", "--priority", "high"],
    )

    assert result.exit_code == 0, result.output
    assert "Notification sent successfully to ops" in result.output
    (sent,) = stub_ntfy.sent
    assert sent.title == "Deploy"
    assert sent.tags == ["rocket", "tada"]
    assert sent.priority.value == "high"


@pytest.mark.unit
def test_notify_failure_exits_1(stub_ntfy):
    stub_ntfy.fail = True
    result = runner.invoke(cli.app, ["notify", "hello"])
    assert result.exit_code == 1
    assert "ntfy returned non-success status: 500" in result.output


@pytest.mark.unit
def test_setup_notify_writes_user_env(monkeypatch):
    written: list[dict] = []
    monkeypatch.setattr(doctor, "write_user_env_vars", lambda values: written.append(values) or "/tmp/.env")

    result = runner.invoke(doctor.app, ["setup-notify"], input="https://ntfy.example.com\ndeploys\n")

    assert result.exit_code == 0, result.output
    assert written == [{"ATHAME_NTFY_SERVER": "https://ntfy.example.com", "ATHAME_NTFY_TOPIC": "deploys"}]


@pytest.mark.unit
def test_notify_rejects_empty_message(stub_ntfy):
    result = runner.invoke(cli.app, ["notify", ""])
    assert result.exit_code == 2
    assert "Invalid value" in result.output
    assert stub_ntfy.sent == []


@pytest.fixture
def engine_client(monkeypatch):
    client = FakeClient(outputs={"tflocal apply": "Apply complete! Resources: 1 added.\n"})

    @asynccontextmanager
    async def fake_open_engine(settings=None):
        yield client

    monkeypatch.setattr(engine, "open_engine", fake_open_engine)
    return client


@pytest.mark.unit
def test_demo_localstack_apply_prints_output(engine_client):
    result = runner.invoke(cli.app, ["--no-banner", "demo", "localstack-apply", "--source", "/work/repo"])

    assert result.exit_code == 0, result.output
    assert "Apply complete! Resources: 1 added." in result.output
    assert engine_client.evaluated_lines()[-2:] == ["tflocal init", "tflocal apply -auto-approve"]


@pytest.mark.unit
def test_demo_terraform_docs_exports_directory(engine_client, tmp_path):
    output = tmp_path / "docs-out"
    result = runner.invoke(
        cli.app,
        ["--no-banner", "demo", "terraform-docs", "--source", "/work/repo", "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    (exported_to, directory), = engine_client.exported
    assert exported_to == str(output)
    assert directory.path == "/src"


@pytest.mark.unit
def test_demo_boilerplate_rejects_malformed_var(engine_client):
    result = runner.invoke(cli.app, ["--no-banner", "demo", "boilerplate", "--var", "ServerName"])
    assert result.exit_code == 2
    assert engine_client.evaluated == []


@pytest.mark.unit
def test_demo_tool_failure_exits_1(monkeypatch):
    client = FakeClient(fail_on=("golangci-lint run",))

    @asynccontextmanager
    async def fake_open_engine(settings=None):
        yield client

    monkeypatch.setattr(engine, "open_engine", fake_open_engine)
    result = runner.invoke(cli.app, ["--no-banner", "demo", "golangci-lint"])

    assert result.exit_code == 1
    assert "golangci-lint exited with code 1" in result.output
