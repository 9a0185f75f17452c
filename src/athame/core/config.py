"""Core configuration.

Centralizes environment variables (pydantic-settings) so that pipelines,
adapters and the CLI read credentials and defaults the same way.

Variables use the `ATHAME_` prefix and are read from `.env` in the working
directory first, then from the per-user `.env`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "athame"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "athame"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "athame"
    return Path.home() / ".config" / "athame"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the per-user .env file."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# athame user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings shared by the CLI, pipelines and adapters."""

    model_config = SettingsConfigDict(
        env_prefix="ATHAME_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per HTTP request (seconds).",
    )
    user_agent: str = Field(
        default="athame/0.1 (+https://github.com/staticaland/athame)",
        min_length=1,
        description="User-Agent for outgoing HTTP requests.",
    )

    # Notifications (ntfy)
    ntfy_server: str = Field(
        default="https://ntfy.sh",
        min_length=8,
        description="Base URL of the ntfy server.",
    )
    ntfy_topic: str = Field(
        default="athame",
        min_length=1,
        description="ntfy topic used by the CI pipelines.",
    )
    notifications_enabled: bool = Field(
        default=True,
        description="Send best-effort notifications around pipeline phases.",
    )

    # Registry
    ghcr_registry: str = Field(default="ghcr.io", min_length=1)
    ghcr_username: str = Field(
        default="staticaland",
        min_length=1,
        description="GHCR user (also the first path segment of published images).",
    )
    ghcr_namespace: str = Field(
        default="athame",
        min_length=1,
        description="Path segment between the user and the image name.",
    )
    ghcr_token: SecretStr | None = Field(
        default=None,
        description="GitHub token with packages:write (e.g. from `gh auth token`).",
    )

    image_source_label: str = Field(
        default="https://github.com/staticaland/athame",
        description="Value of the org.opencontainers.image.source label.",
    )
    platforms: list[str] = Field(
        default_factory=lambda: ["linux/amd64", "linux/arm64"],
        min_length=1,
        description="Platforms built for published images.",
    )

    # Deploy targets
    concurrent_deploy: bool = Field(
        default=True,
        description="Attempt every configured deploy target concurrently.",
    )
    flyio_app: str | None = None
    flyio_token: SecretStr | None = None
    flyio_region: str = Field(default="arn", min_length=1)

    render_deploy_hook_url: SecretStr | None = None

    gcloud_service: str | None = None
    gcloud_project: str | None = None
    gcloud_region: str = Field(default="us-central1", min_length=1)
    gcloud_service_account_key: SecretStr | None = None
    gcloud_allow_unauthenticated: bool = False
    artifact_registry_repo: str = Field(default="ghcr", min_length=1)
    artifact_registry_region: str = Field(default="europe-north2", min_length=1)

    # Engine / logging
    engine_log_output: bool = Field(
        default=False,
        description="Stream Dagger engine output to stderr.",
    )
    log_level: str = Field(
        default="INFO",
        description="loguru level for the CLI (DEBUG, INFO, WARNING, ...).",
    )
