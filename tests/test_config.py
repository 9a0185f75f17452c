from __future__ import annotations

import pytest

from athame.core.config import AppSettings, write_user_env_vars


@pytest.mark.unit
def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.ntfy_server == "https://ntfy.sh"
    assert settings.ntfy_topic == "athame"
    assert settings.ghcr_username == "staticaland"
    assert settings.platforms == ["linux/amd64", "linux/arm64"]
    assert settings.concurrent_deploy is True
    assert settings.flyio_region == "arn"
    assert settings.gcloud_region == "us-central1"
    assert settings.artifact_registry_repo == "ghcr"
    assert settings.artifact_registry_region == "europe-north2"


@pytest.mark.unit
def test_env_prefix(monkeypatch):
    monkeypatch.setenv("ATHAME_NTFY_TOPIC", "deploys")
    monkeypatch.setenv("ATHAME_CONCURRENT_DEPLOY", "false")
    monkeypatch.setenv("ATHAME_GHCR_TOKEN", "ghp_secret")
    monkeypatch.setenv("ATHAME_PLATFORMS", '["linux/amd64"]')

    settings = AppSettings(_env_file=None)
    assert settings.ntfy_topic == "deploys"
    assert settings.concurrent_deploy is False
    assert settings.platforms == ["linux/amd64"]
    assert settings.ghcr_token is not None
    assert settings.ghcr_token.get_secret_value() == "ghp_secret"
    assert "ghp_secret" not in repr(settings)


@pytest.mark.unit
def test_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("ATHAME_NTFY_SERVER=https://ntfy.example.com\nUNRELATED=1\n", encoding="utf-8")

    settings = AppSettings(_env_file=env_file)
    assert settings.ntfy_server == "https://ntfy.example.com"


@pytest.mark.unit
def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# comment\nATHAME_NTFY_TOPIC=old\nATHAME_FLYIO_APP='app'\n", encoding="utf-8")

    written = write_user_env_vars(
        {"ATHAME_NTFY_TOPIC": "new", "ATHAME_NTFY_SERVER": "https://ntfy.sh", "ATHAME_SKIPPED": None},
        env_path=env_path,
    )

    assert written == env_path
    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == [
        "ATHAME_FLYIO_APP=app",
        "ATHAME_NTFY_SERVER=https://ntfy.sh",
        "ATHAME_NTFY_TOPIC=new",
    ]
