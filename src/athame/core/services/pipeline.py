"""Pipeline run bookkeeping.

`PipelineRun` is shared by the CI pipelines: it enforces the phase order,
records a `PipelineReport` and fires best-effort notifications. Side effects
(printing, progress) stay in the CLI through `PipelineHooks`.
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone

from loguru import logger

from athame.core.domain.models import DeployResult, Notification, PhaseResult, PipelineReport
from athame.core.domain.phase import Phase
from athame.core.errors import PhaseOrderError, TaskGroupError
from athame.core.interfaces.notifier import Notifier
from athame.core.services import notify as notifications


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, tables)."""

    phase_started: Callable[[Phase], None] | None = None
    phase_finished: Callable[[PhaseResult], None] | None = None


class PipelineRun:
    """State of one pipeline invocation."""

    def __init__(
        self,
        name: str,
        *,
        notifier: Notifier | None = None,
        topic: str = "athame",
        hooks: PipelineHooks | None = None,
    ) -> None:
        self.name = name
        self.notifier = notifier
        self.topic = topic
        self.hooks = hooks or PipelineHooks()
        self.report = PipelineReport(pipeline=name)
        self._last: Phase | None = None
        self._failed: Phase | None = None

    @property
    def failed_phase(self) -> Phase | None:
        return self._failed

    def _check_order(self, phase: Phase) -> None:
        if self._failed is not None:
            raise PhaseOrderError(
                f"{self.name}: cannot start {phase.value} after failed {self._failed.value}"
            )
        if self._last is not None and not self._last.precedes(phase):
            raise PhaseOrderError(
                f"{self.name}: {phase.value} cannot run after {self._last.value}"
            )

    @asynccontextmanager
    async def phase(self, phase: Phase) -> AsyncIterator[PhaseResult]:
        """Record `phase`; exceptions are stored on the result and re-raised."""

        self._check_order(phase)
        self._last = phase
        result = PhaseResult(phase=phase.value)
        self.report.phases.append(result)
        if self.hooks.phase_started:
            self.hooks.phase_started(phase)
        logger.info("[{}] {} started", self.name, phase.value)

        started = time.perf_counter()
        try:
            yield result
        except Exception as exc:
            result.ok = False
            result.error = str(exc)
            if isinstance(exc, TaskGroupError) and not result.tasks:
                result.tasks = list(exc.outcomes)
            self._failed = phase
            logger.warning("[{}] {} failed: {}", self.name, phase.value, exc)
            raise
        else:
            result.ok = True
            logger.info("[{}] {} completed", self.name, phase.value)
        finally:
            result.duration_seconds = time.perf_counter() - started
            if self.hooks.phase_finished:
                self.hooks.phase_finished(result)

    def record_address(self, address: str) -> None:
        self.report.address = address

    def record_deployment(self, deployment: DeployResult) -> None:
        self.report.deployments.append(deployment)

    def finish(self) -> PipelineReport:
        self.report.finished_at = datetime.now(timezone.utc)
        return self.report

    async def send(self, notification: Notification) -> bool:
        return await notifications.notify_safely(self.notifier, notification)

    async def notify_started(self, title: str, message: str, *, tags: list[str] | None = None) -> bool:
        return await self.send(notifications.started(self.topic, title, message, tags=tags))

    async def notify_completed(
        self,
        title: str,
        message: str,
        *,
        markdown: bool = False,
        view_url: str | None = None,
    ) -> bool:
        return await self.send(
            notifications.completed(self.topic, title, message, markdown=markdown, view_url=view_url)
        )

    async def notify_failed(self, title: str) -> bool:
        return await self.send(notifications.failed(self.topic, title))
