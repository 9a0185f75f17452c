"""MkDocs CI/CD: lint, build and publish a documentation site, then deploy it.

The pipeline runs in three phases:

1. verify: vale, prettier, markdownlint-cli2 and lychee run concurrently
   against the site directory; all of them finish before the join.
2. publish: the site is built once, wrapped in an nginx image per platform
   and pushed to GHCR as a single multi-platform image.
3. deploy: the published address goes to every configured target.

Notifications around each step are best-effort and never change the result.
"""

from __future__ import annotations

from collections.abc import Awaitable, Sequence
from typing import Any

import dagger

from athame.adapters import registry
from athame.adapters.tools import Lychee, MarkdownlintCli2, MkdocsMaterial, Prettier, Vale
from athame.core.config import AppSettings
from athame.core.domain.models import DeployResult, PipelineReport, TaskOutcome
from athame.core.domain.phase import Phase
from athame.core.errors import AthameError, PipelineError
from athame.core.interfaces.deploy_target import DeployTarget
from athame.core.interfaces.notifier import Notifier
from athame.core.services import fanout
from athame.core.services.deploy import deploy_to_targets
from athame.core.services.notify import published_message
from athame.core.services.pipeline import PipelineHooks, PipelineRun

PIPELINE_NAME = "mkdocs-ci"


class MkdocsCi:
    def __init__(
        self,
        client: dagger.Client,
        source: dagger.Directory,
        settings: AppSettings | None = None,
        *,
        site_path: str = "fixtures/mkdocs-material",
        image_name: str = "mkdocs-demo",
        tag: str = "latest",
        ghcr_username: str | None = None,
        notifier: Notifier | None = None,
        hooks: PipelineHooks | None = None,
    ) -> None:
        self.client = client
        self.source = source
        self.settings = settings or AppSettings()
        self.site_path = site_path
        self.image_name = image_name
        self.tag = tag
        self.ghcr_username = ghcr_username or self.settings.ghcr_username
        self.notifier = notifier
        self.hooks = hooks
        self.last_report: PipelineReport | None = None

    @property
    def site_dir(self) -> dagger.Directory:
        return self.source.directory(self.site_path)

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

    def checks(self) -> dict[str, Awaitable[Any]]:
        """The verify tasks, keyed by tool name."""

        site = self.site_dir
        vale = Vale(self.client)
        prettier = Prettier(self.client)
        markdownlint = MarkdownlintCli2(self.client)
        lychee = Lychee(self.client)
        return {
            vale.name: vale.run(vale.check(site, "docs")),
            prettier.name: prettier.run(prettier.check(site, "docs/**/*.md")),
            markdownlint.name: markdownlint.run(markdownlint.check(site, "docs/**/*.md")),
            lychee.name: lychee.run(lychee.check(site, "docs")),
        }

    async def run_all_tests(self) -> list[TaskOutcome]:
        """Run every check concurrently; raises `TaskGroupError` if any failed."""

        return await fanout.run_all(self.checks(), phase=Phase.VERIFY)

    def build(self) -> dagger.Directory:
        return MkdocsMaterial(self.client).build(self.site_dir)

    async def publish(self, ghcr_token: dagger.Secret) -> str:
        """Build the site once and push it as a multi-platform nginx image."""

        variants = registry.build_site_variants(
            self.client,
            self.build(),
            image_name=self.image_name,
            tag=self.tag,
            source_label=self.settings.image_source_label,
            platforms=self.settings.platforms,
        )
        return await registry.publish_variants(
            self.client,
            self.image_address,
            variants,
            registry=self.settings.ghcr_registry,
            username=self.ghcr_username,
            token=ghcr_token,
        )

    async def deploy_to_all_platforms(
        self,
        address: str,
        targets: Sequence[DeployTarget],
        *,
        run: PipelineRun | None = None,
    ) -> list[DeployResult]:
        run = run or self._new_run()
        if not targets:
            return []
        async with run.phase(Phase.DEPLOY) as result:
            return await deploy_to_targets(
                run,
                address,
                targets,
                concurrent=self.settings.concurrent_deploy,
                phase_result=result,
            )

    async def lint_build_publish(
        self,
        ghcr_token: dagger.Secret,
        targets: Sequence[DeployTarget] = (),
    ) -> str:
        """Verify, publish, then deploy; returns the published address."""

        run = self._new_run()
        self.last_report = run.report
        try:
            await run.notify_started("MkDocs CI/CD Started", "Starting tests...")

            try:
                async with run.phase(Phase.VERIFY) as result:
                    result.tasks = await self.run_all_tests()
            except AthameError as exc:
                await run.notify_failed("Tests Failed")
                raise PipelineError(Phase.VERIFY, f"tests failed: {exc}") from exc
            await run.notify_completed("Tests Completed", "Tests passed. Building site...")

            try:
                async with run.phase(Phase.PUBLISH):
                    address = await self.publish(ghcr_token)
            except AthameError:
                await run.notify_failed("Image Publishing Failed")
                raise
            run.record_address(address)
            await run.notify_completed(
                "Image Publishing Completed",
                published_message("GHCR", address, run_hint=True),
                markdown=True,
            )

            await self.deploy_to_all_platforms(address, targets, run=run)
            return address
        finally:
            run.finish()
