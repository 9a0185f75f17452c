"""Go CI/CD: golangci-lint and gosec in parallel, then build and publish to ttl.sh."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any

import dagger
from loguru import logger

from athame.adapters.tools import GolangciLint, Gosec
from athame.core.domain.models import PipelineReport, TaskOutcome
from athame.core.domain.phase import Phase
from athame.core.errors import AthameError, PipelineError, PublishError
from athame.core.interfaces.notifier import Notifier
from athame.core.services import fanout
from athame.core.services.notify import published_message
from athame.core.services.pipeline import PipelineHooks, PipelineRun

PIPELINE_NAME = "go-ci"

GOLANG_IMAGE = "golang"
# renovate: datasource=docker depName=golang
GOLANG_TAG = "1.25.3-alpine3.22@sha256:aee43c3ccbf24fdffb7295693b6e33b21e01baec1b2a55acc351fde345e9ec34"

TTL_REGISTRY = "ttl.sh"


class GoCi:
    def __init__(
        self,
        client: dagger.Client,
        *,
        golang_image_tag: str = GOLANG_TAG,
        notifier: Notifier | None = None,
        topic: str = "athame",
        hooks: PipelineHooks | None = None,
    ) -> None:
        self.client = client
        self.golang_image_tag = golang_image_tag
        self.notifier = notifier
        self.topic = topic
        self.hooks = hooks
        self.last_report: PipelineReport | None = None

    def base(self) -> dagger.Container:
        """Go toolchain container."""

        return self.client.container().from_(f"{GOLANG_IMAGE}:{self.golang_image_tag}").without_entrypoint()

    async def lint(self, source: dagger.Directory) -> str:
        tool = GolangciLint(self.client)
        return await tool.run(tool.check(source))

    async def gosec(self, source: dagger.Directory) -> str:
        tool = Gosec(self.client)
        return await tool.run(tool.check(source))

    def checks(self, source: dagger.Directory) -> dict[str, Awaitable[Any]]:
        return {
            GolangciLint.name: self.lint(source),
            Gosec.name: self.gosec(source),
        }

    async def run_all_tests(self, source: dagger.Directory) -> list[TaskOutcome]:
        return await fanout.run_all(self.checks(source), phase=Phase.VERIFY)

    def production_image(self, source: dagger.Directory, binary_name: str = "app") -> dagger.Container:
        """Static binary on alpine, used as the entrypoint."""

        builder = (
            self.base()
            .with_directory("/src", source)
            .with_workdir("/src")
            .with_env_variable("CGO_ENABLED", "0")
            .with_exec(["go", "build", "-o", binary_name])
        )
        binary = f"/bin/{binary_name}"
        return (
            self.client.container()
            .from_("alpine:latest")
            .with_file(binary, builder.file(f"/src/{binary_name}"))
            .with_entrypoint([binary])
        )

    async def build(
        self,
        source: dagger.Directory,
        binary_name: str = "app",
        image_name: str = "myapp",
    ) -> str:
        """Build the binary image and publish it to ttl.sh; returns the address."""

        address = f"{TTL_REGISTRY}/{image_name}:latest"
        logger.info("Publishing {}", address)
        try:
            published = await self.production_image(source, binary_name).publish(address)
        except dagger.DaggerError as exc:
            raise PublishError(f"failed to publish to {TTL_REGISTRY}: {exc}") from exc
        logger.info("Published {}", published)
        return published

    async def lint_and_build(
        self,
        source: dagger.Directory,
        binary_name: str = "app",
        image_name: str = "myapp",
    ) -> str:
        run = PipelineRun(PIPELINE_NAME, notifier=self.notifier, topic=self.topic, hooks=self.hooks)
        self.last_report = run.report
        try:
            await run.notify_started("Go CI/CD Started", "Starting tests...")

            try:
                async with run.phase(Phase.VERIFY) as result:
                    result.tasks = await self.run_all_tests(source)
            except AthameError as exc:
                await run.notify_failed("Tests Failed")
                raise PipelineError(Phase.VERIFY, f"tests failed: {exc}") from exc
            await run.notify_completed("Tests Completed", "Tests passed. Building binary...")

            try:
                async with run.phase(Phase.PUBLISH):
                    address = await self.build(source, binary_name, image_name)
            except AthameError:
                await run.notify_failed("Image Publishing Failed")
                raise
            run.record_address(address)
            await run.notify_completed(
                "Image Publishing Completed",
                published_message(TTL_REGISTRY, address),
                markdown=True,
            )
            return address
        finally:
            run.finish()
