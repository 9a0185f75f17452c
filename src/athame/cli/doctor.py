"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import shutil

import httpx
import typer
from rich.console import Console
from rich.table import Table

from athame.adapters.http_client import build_async_client
from athame.core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, str(exc)
    return True, f"HTTP {response.status_code}"


def _check_dagger() -> tuple[bool, str]:
    path = shutil.which("dagger")
    if path is None:
        return False, "dagger CLI not found on PATH (https://docs.dagger.io/install)"
    return True, path


def _credential_rows(settings: AppSettings) -> list[tuple[str, str, str]]:
    rows = [
        ("GHCR token", "OK" if settings.ghcr_token else "MISSING", "required to publish images"),
    ]
    fly_ready = bool(settings.flyio_app and settings.flyio_token)
    rows.append(("Fly.io", "OK" if fly_ready else "OPTIONAL", settings.flyio_app or "target disabled"))
    rows.append(
        (
            "Render",
            "OK" if settings.render_deploy_hook_url else "OPTIONAL",
            "deploy hook set" if settings.render_deploy_hook_url else "target disabled",
        )
    )
    gcloud_ready = bool(settings.gcloud_service and settings.gcloud_project and settings.gcloud_service_account_key)
    rows.append(("Cloud Run", "OK" if gcloud_ready else "OPTIONAL", settings.gcloud_service or "target disabled"))
    return rows


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="athame doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_dagger, detail_dagger = _check_dagger()
    table.add_row("Dagger CLI", "OK" if ok_dagger else "FAIL", detail_dagger)

    if settings.notifications_enabled:
        ok_http, detail_http = asyncio.run(_check_http(settings.ntfy_server, settings))
        table.add_row("ntfy server", "OK" if ok_http else "FAIL", f"{settings.ntfy_server} ({detail_http})")
        table.add_row("ntfy topic", "OK", settings.ntfy_topic)
    else:
        table.add_row("Notifications", "DISABLED", "ATHAME_NOTIFICATIONS_ENABLED=false")

    for name, status, detail in _credential_rows(settings):
        table.add_row(name, status, detail)

    _console.print(table)

    if not ok_dagger:
        _console.print("\n[yellow]Note:[/yellow] pipelines need a running Dagger engine.")


@app.command(name="setup-notify")
def setup_notify() -> None:
    """Interactive ntfy setup (stores config in the user config .env)."""

    settings = AppSettings()
    server = typer.prompt("ntfy server", default=settings.ntfy_server, show_default=True).strip()
    topic = typer.prompt("ntfy topic", default=settings.ntfy_topic, show_default=True).strip()

    if not server or not topic:
        raise typer.BadParameter("server and topic are required")

    env_path = write_user_env_vars(
        {
            "ATHAME_NTFY_SERVER": server,
            "ATHAME_NTFY_TOPIC": topic,
        }
    )

    _console.print(f"[green]Saved notification config to:[/green] {env_path}")
