"""Miele delay-start app CI/CD: build the Vite app, scan, publish to GHCR, deploy to Fly.io."""

from __future__ import annotations

import dagger
from loguru import logger

from athame.adapters import registry
from athame.adapters.deploy_targets import FlyioTarget
from athame.adapters.tools import Node, Trivy
from athame.core.config import AppSettings
from athame.core.domain.models import PipelineReport
from athame.core.domain.phase import Phase
from athame.core.errors import AthameError, ScanError
from athame.core.interfaces.notifier import Notifier
from athame.core.services.deploy import deploy_to_targets
from athame.core.services.notify import published_message
from athame.core.services.pipeline import PipelineHooks, PipelineRun

PIPELINE_NAME = "miele-ci"
SCAN_TARGET = "scan-target"


class MieleCi:
    def __init__(
        self,
        client: dagger.Client,
        source: dagger.Directory,
        settings: AppSettings | None = None,
        *,
        image_name: str = "miele",
        tag: str = "latest",
        ghcr_username: str | None = None,
        notifier: Notifier | None = None,
        hooks: PipelineHooks | None = None,
    ) -> None:
        self.client = client
        self.source = source
        self.settings = settings or AppSettings()
        self.image_name = image_name
        self.tag = tag
        self.ghcr_username = ghcr_username or self.settings.ghcr_username
        self.notifier = notifier
        self.hooks = hooks
        self.last_report: PipelineReport | None = None

    @property
    def image_address(self) -> str:
        return registry.image_address(
            self.settings.ghcr_registry,
            self.ghcr_username,
            self.settings.ghcr_namespace,
            self.image_name,
            self.tag,
        )

    def _new_run(self) -> PipelineRun:
        return PipelineRun(
            PIPELINE_NAME,
            notifier=self.notifier,
            topic=self.settings.ntfy_topic,
            hooks=self.hooks,
        )

    def build(self) -> dagger.Directory:
        """Production build of the app; returns `/app/dist`."""

        return (
            Node(self.client)
            .base()
            .with_workdir("/app")
            .with_env_variable("NODE_ENV", "production")
            # Dependencies first so the install layer is cached.
            .with_file("/app/package-lock.json", self.source.file("package-lock.json"))
            .with_file("/app/package.json", self.source.file("package.json"))
            .with_exec(["npm", "ci", "--include=dev"])
            .with_directory("/app", self.source)
            .with_exec(["npm", "run", "build"])
            .directory("/app/dist")
        )

    async def scan(self, run: PipelineRun, container: dagger.Container) -> str:
        await run.notify_started(
            "Trivy Security Scan Started",
            "Scanning container for vulnerabilities...",
            tags=["shield"],
        )
        try:
            report = await Trivy(self.client).scan_container(container, SCAN_TARGET)
        except AthameError as exc:
            await run.notify_failed("Trivy Security Scan Failed")
            raise ScanError(f"trivy scan failed: {exc}") from exc
        logger.info("Trivy scan results:\n{}", report)
        await run.notify_completed("Trivy Security Scan Completed", "Security scan completed successfully.")
        return report

    async def _scan_and_publish(self, run: PipelineRun, ghcr_token: dagger.Secret) -> str:
        variants = registry.build_site_variants(
            self.client,
            self.build(),
            image_name=self.image_name,
            tag=self.tag,
            source_label=self.settings.image_source_label,
            platforms=self.settings.platforms,
        )
        async with run.phase(Phase.SCAN):
            await self.scan(run, variants[0])
        async with run.phase(Phase.PUBLISH):
            address = await registry.publish_variants(
                self.client,
                self.image_address,
                variants,
                registry=self.settings.ghcr_registry,
                username=self.ghcr_username,
                token=ghcr_token,
            )
        run.record_address(address)
        return address

    async def publish(self, ghcr_token: dagger.Secret) -> str:
        """Scan the first platform variant, then publish all of them to GHCR."""

        run = self._new_run()
        self.last_report = run.report
        try:
            return await self._scan_and_publish(run, ghcr_token)
        finally:
            run.finish()

    async def deploy(
        self,
        ghcr_token: dagger.Secret,
        flyio_app: str,
        flyio_token: dagger.Secret,
        flyio_region: str = "arn",
    ) -> str:
        run = self._new_run()
        self.last_report = run.report
        try:
            await run.notify_started("Miele CI/CD Started", "Starting build...")

            try:
                address = await self._scan_and_publish(run, ghcr_token)
            except AthameError:
                await run.notify_failed("Image Publishing Failed")
                raise
            await run.notify_completed(
                "Image Publishing Completed",
                published_message("GHCR", address),
                markdown=True,
            )

            target = FlyioTarget(
                self.client,
                app=flyio_app,
                token=flyio_token,
                region=flyio_region,
                internal_port=80,
            )
            async with run.phase(Phase.DEPLOY) as result:
                await deploy_to_targets(run, address, [target], concurrent=False, phase_result=result)
            return address
        finally:
            run.finish()
