"""athame command line.

Thin layer over the pipelines: it opens the engine, wires settings,
notifier and deploy targets, and renders results with rich. Every
`AthameError` ends as a red message and exit status 1.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from athame import __version__
from athame.adapters import engine
from athame.adapters.deploy_targets import targets_from_settings
from athame.adapters.json_exporter import export_report_json
from athame.adapters.notifiers import NtfyNotifier
from athame.adapters.report_exporter import export_report_html
from athame.adapters.tools import Crane, Trivy
from athame.adapters.tools.trivy import DEFAULT_SEVERITY
from athame.cli import doctor
from athame.cli.ui_components import (
    build_tasks_table,
    phase_finished_printer,
    phase_started_printer,
    print_banner,
    print_report,
)
from athame.core.config import AppSettings
from athame.core.domain.models import Notification, PipelineReport, Priority
from athame.core.errors import AthameError, TaskGroupError
from athame.core.logging import configure_logging
from athame.core.services import demos
from athame.core.services.go_ci import GoCi
from athame.core.services.miele_ci import MieleCi
from athame.core.services.mkdocs_ci import MkdocsCi
from athame.core.services.pipeline import PipelineHooks

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="CI/CD pipelines built from containerized tools.")
mkdocs_app = typer.Typer(no_args_is_help=True, help="Lint, build and publish an MkDocs Material site.")
go_app = typer.Typer(no_args_is_help=True, help="Lint, build and publish a Go application.")
miele_app = typer.Typer(no_args_is_help=True, help="Build, scan, publish and deploy the Miele app.")
demo_app = typer.Typer(no_args_is_help=True, help="Single-tool demos (terraform, boilerplate, LocalStack, ...).")

app.add_typer(mkdocs_app, name="mkdocs")
app.add_typer(go_app, name="go")
app.add_typer(miele_app, name="miele")
app.add_typer(demo_app, name="demo")
app.add_typer(doctor.app, name="doctor")

console = Console()

ReportOption = typer.Option(None, "--report", help="Write the run report (.json, or .html).")


def _execute(action: Callable[[], Awaitable[T]]) -> T:
    """Run an async action; turn project errors into exit status 1."""

    try:
        return asyncio.run(action())
    except TaskGroupError as exc:
        console.print(build_tasks_table(exc.outcomes))
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    except AthameError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc


def _hooks() -> PipelineHooks:
    return PipelineHooks(
        phase_started=phase_started_printer(console),
        phase_finished=phase_finished_printer(console),
    )


def _notifier(settings: AppSettings) -> NtfyNotifier | None:
    return NtfyNotifier(settings) if settings.notifications_enabled else None


def _export_report(report: PipelineReport | None, path: Path | None) -> None:
    if report is None:
        return
    print_report(console, report)
    if path is None:
        return
    if path.suffix.lower() in {".html", ".htm"}:
        export_report_html(report, path)
    else:
        export_report_json(report, path)
    console.print(f"[green]Report written to:[/green] {path}")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)
    if not no_banner and ctx.invoked_subcommand not in {"notify", "digest"}:
        print_banner(console)


@app.command()
def version() -> None:
    """Print the athame version."""

    console.print(__version__)


# mkdocs


def _mkdocs_ci(client: Any, settings: AppSettings, source: Path, site_path: str, image_name: str, tag: str) -> MkdocsCi:
    return MkdocsCi(
        client,
        engine.host_directory(client, str(source)),
        settings,
        site_path=site_path,
        image_name=image_name,
        tag=tag,
        notifier=_notifier(settings),
        hooks=_hooks(),
    )


SourceOption = typer.Option(Path("."), "--source", help="Repository root.")
SitePathOption = typer.Option("fixtures/mkdocs-material", "--site-path")


@mkdocs_app.command("lint")
def mkdocs_lint(
    source: Path = SourceOption,
    site_path: str = SitePathOption,
) -> None:
    """Run vale, prettier, markdownlint-cli2 and lychee concurrently."""

    settings = AppSettings()

    async def action():
        async with engine.open_engine(settings) as client:
            ci = _mkdocs_ci(client, settings, source, site_path, "mkdocs-demo", "latest")
            return await ci.run_all_tests()

    console.print(build_tasks_table(_execute(action)))


@mkdocs_app.command("publish")
def mkdocs_publish(
    source: Path = SourceOption,
    site_path: str = SitePathOption,
    image_name: str = typer.Option("mkdocs-demo", "--image-name"),
    tag: str = typer.Option("latest", "--tag"),
) -> None:
    """Build the site and publish it to GHCR."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            token = engine.secret_from(client, "ghcr-token", settings.ghcr_token, required=True)
            ci = _mkdocs_ci(client, settings, source, site_path, image_name, tag)
            return await ci.publish(token)

    console.print(f"[bold]Published:[/bold] {_execute(action)}")


@mkdocs_app.command("ci")
def mkdocs_pipeline(
    source: Path = SourceOption,
    site_path: str = SitePathOption,
    image_name: str = typer.Option("mkdocs-demo", "--image-name"),
    tag: str = typer.Option("latest", "--tag"),
    report: Path | None = ReportOption,
) -> None:
    """Lint, publish, then deploy to every configured target."""

    settings = AppSettings()
    holder: dict[str, MkdocsCi] = {}

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            token = engine.secret_from(client, "ghcr-token", settings.ghcr_token, required=True)
            ci = holder["ci"] = _mkdocs_ci(client, settings, source, site_path, image_name, tag)
            targets = targets_from_settings(client, settings, service_name=image_name)
            return await ci.lint_build_publish(token, targets)

    try:
        _execute(action)
    finally:
        if "ci" in holder:
            _export_report(holder["ci"].last_report, report)


# go


GoSourceOption = typer.Option(Path("."), "--source", help="Go module directory.")


def _go_ci(client: Any, settings: AppSettings) -> GoCi:
    return GoCi(client, notifier=_notifier(settings), topic=settings.ntfy_topic, hooks=_hooks())


@go_app.command("lint")
def go_lint(source: Path = GoSourceOption) -> None:
    """Run golangci-lint and gosec concurrently."""

    settings = AppSettings()

    async def action():
        async with engine.open_engine(settings) as client:
            return await _go_ci(client, settings).run_all_tests(engine.host_directory(client, str(source)))

    console.print(build_tasks_table(_execute(action)))


@go_app.command("build")
def go_build(
    source: Path = GoSourceOption,
    binary_name: str = typer.Option("app", "--binary-name"),
    image_name: str = typer.Option("myapp", "--image-name"),
) -> None:
    """Build the binary image and publish it to ttl.sh."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            ci = _go_ci(client, settings)
            return await ci.build(engine.host_directory(client, str(source)), binary_name, image_name)

    console.print(f"[bold]Published:[/bold] {_execute(action)}")


@go_app.command("ci")
def go_pipeline(
    source: Path = GoSourceOption,
    binary_name: str = typer.Option("app", "--binary-name"),
    image_name: str = typer.Option("myapp", "--image-name"),
    report: Path | None = ReportOption,
) -> None:
    """Lint, then build and publish."""

    settings = AppSettings()
    holder: dict[str, GoCi] = {}

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            ci = holder["ci"] = _go_ci(client, settings)
            return await ci.lint_and_build(engine.host_directory(client, str(source)), binary_name, image_name)

    try:
        _execute(action)
    finally:
        if "ci" in holder:
            _export_report(holder["ci"].last_report, report)


# miele


@miele_app.command("deploy")
def miele_deploy(
    source: Path = typer.Option(Path("fixtures/miele-delay-start"), "--source"),
    image_name: str = typer.Option("miele", "--image-name"),
    tag: str = typer.Option("latest", "--tag"),
    flyio_app: str | None = typer.Option(None, "--flyio-app", help="Defaults to ATHAME_FLYIO_APP."),
    flyio_region: str | None = typer.Option(None, "--flyio-region"),
    report: Path | None = ReportOption,
) -> None:
    """Build, scan, publish to GHCR and deploy to Fly.io."""

    settings = AppSettings()
    app_name = flyio_app or settings.flyio_app
    if not app_name:
        raise typer.BadParameter("a Fly.io app is required (--flyio-app or ATHAME_FLYIO_APP)")
    holder: dict[str, MieleCi] = {}

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            ghcr = engine.secret_from(client, "ghcr-token", settings.ghcr_token, required=True)
            fly = engine.secret_from(client, "flyio-token", settings.flyio_token, required=True)
            ci = holder["ci"] = MieleCi(
                client,
                engine.host_directory(client, str(source)),
                settings,
                image_name=image_name,
                tag=tag,
                notifier=_notifier(settings),
                hooks=_hooks(),
            )
            return await ci.deploy(ghcr, app_name, fly, flyio_region or settings.flyio_region)

    try:
        _execute(action)
    finally:
        if "ci" in holder:
            _export_report(holder["ci"].last_report, report)


# demos


def _print_output(text: str) -> None:
    console.print(text, markup=False, highlight=False)


async def _export(directory: Any, output: Path, tool: str) -> str:
    return await engine.export_directory(directory, str(output), tool=tool)


@demo_app.command("terraform-plan")
def demo_terraform_plan(
    source: Path = SourceOption,
    path: str = typer.Option("fixtures/terraform", "--path", help="Module directory inside --source."),
) -> None:
    """terraform init and plan."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            return await demos.terraform_plan(client, engine.host_directory(client, str(source)), path)

    _print_output(_execute(action))


@demo_app.command("terraform-docs")
def demo_terraform_docs(
    source: Path = SourceOption,
    path: str = typer.Option("fixtures/terraform", "--path", help="Module directory inside --source."),
    output: Path = typer.Option(Path("terraform-docs-output"), "--output"),
) -> None:
    """Generate README.md for a terraform module and export the module directory."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            directory = demos.terraform_docs(client, engine.host_directory(client, str(source)), path)
            return await _export(directory, output, "terraform-docs")

    console.print(f"[green]Exported to:[/green] {_execute(action)}")


@demo_app.command("boilerplate")
def demo_boilerplate(
    template: str = typer.Option(demos.DEFAULT_TEMPLATE, "--template", help="git URL, optionally url#ref:subpath."),
    output_folder: str = typer.Option("output", "--output-folder"),
    var: list[str] = typer.Option([], "--var", help="NAME=VALUE, repeatable."),
    output: Path = typer.Option(Path("boilerplate-output"), "--output"),
) -> None:
    """Render a boilerplate template and export the result."""

    variables: dict[str, str] = {}
    for item in var:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint="--var")
        variables[name] = value
    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            directory = demos.boilerplate(client, template, output_folder, variables or None)
            return await _export(directory, output, "boilerplate")

    console.print(f"[green]Exported to:[/green] {_execute(action)}")


@demo_app.command("golangci-lint")
def demo_golangci_lint(
    source: Path = SourceOption,
    path: str = typer.Option("fixtures/hello-world-cli", "--path"),
) -> None:
    """golangci-lint on a Go module."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            return await demos.golangci_lint_demo(client, engine.host_directory(client, str(source)), path)

    _print_output(_execute(action))


@demo_app.command("mkdocs-site")
def demo_mkdocs_site(
    source: Path = SourceOption,
    site_path: str = SitePathOption,
    output: Path = typer.Option(Path("site"), "--output"),
) -> None:
    """Build the MkDocs Material site and export it."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            site = demos.mkdocs_build_site(client, engine.host_directory(client, str(source)), site_path)
            return await _export(site, output, "mkdocs-material")

    console.print(f"[green]Exported to:[/green] {_execute(action)}")


@demo_app.command("localstack-health")
def demo_localstack_health() -> None:
    """Query LocalStack's health endpoint."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            return await demos.localstack_health(client)

    _print_output(_execute(action))


@demo_app.command("localstack-bucket")
def demo_localstack_bucket(bucket: str = typer.Option("demo-bucket", "--bucket")) -> None:
    """Create an S3 bucket in LocalStack."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            return await demos.localstack_create_bucket(client, bucket)

    _print_output(_execute(action))


@demo_app.command("localstack-apply")
def demo_localstack_apply(
    source: Path = SourceOption,
    workdir: str = typer.Option("fixtures/terraform-localstack", "--workdir"),
) -> None:
    """tflocal init and apply against LocalStack."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            return await demos.localstack_terraform_apply(client, engine.host_directory(client, str(source)), workdir)

    _print_output(_execute(action))


# single tools


@app.command()
def notify(
    message: str = typer.Argument(..., help="Notification body."),
    title: str | None = typer.Option(None, "--title"),
    topic: str | None = typer.Option(None, "--topic", help="Defaults to ATHAME_NTFY_TOPIC."),
    priority: Priority | None = typer.Option(None, "--priority"),
    tags: str = typer.Option("", "--tags", help="Comma-separated, e.g. 'warning,skull'."),
    markdown: bool = typer.Option(False, "--markdown"),
    actions: str | None = typer.Option(None, "--actions", help="e.g. 'view, Open, https://example.com'."),
) -> None:
    """Send a single ntfy notification."""

    settings = AppSettings()
    try:
        notification = Notification(
            topic=topic or settings.ntfy_topic,
            message=message,
            title=title,
            priority=priority,
            tags=[t.strip() for t in tags.split(",") if t.strip()],
            markdown=markdown,
            actions=actions,
        )
    except ValidationError as exc:
        problems = "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in exc.errors())
        raise typer.BadParameter(problems) from exc
    console.print(_execute(lambda: NtfyNotifier(settings).send(notification)))


@app.command("scan-image")
def scan_image(
    image: str = typer.Argument(..., help="Image reference to scan."),
    severity: str = typer.Option(DEFAULT_SEVERITY, "--severity"),
    exit_code: int = typer.Option(0, "--exit-code", help="Exit code trivy uses when issues are found."),
    fmt: str = typer.Option("table", "--format"),
) -> None:
    """Scan an image reference with trivy."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            result = await Trivy(client).scan_image(image, severity=severity, exit_code=exit_code, fmt=fmt)
            logger.info("Scanned {}", image)
            return result

    console.print(_execute(action), markup=False, highlight=False)


@app.command()
def digest(image: str = typer.Argument(..., help="Image reference.")) -> None:
    """Print the digest of an image (crane digest)."""

    settings = AppSettings()

    async def action() -> str:
        async with engine.open_engine(settings) as client:
            return await Crane(client).digest(image)

    console.print(_execute(action).strip(), markup=False, highlight=False)


def run() -> None:
    app()
