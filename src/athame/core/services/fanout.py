"""Concurrent fan-out / join.

Every task in a phase runs to completion, even when a sibling fails; once
all of them are done, the failure that happened first is raised. Nothing is
cancelled early.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Mapping
from typing import Any

from loguru import logger

from athame.core.domain.models import TaskOutcome
from athame.core.domain.phase import Phase
from athame.core.errors import TaskGroupError

_MAX_OUTPUT_CHARS = 4_000


def _clip(text: str) -> str:
    if len(text) <= _MAX_OUTPUT_CHARS:
        return text
    return text[: _MAX_OUTPUT_CHARS - 1].rstrip() + "…"


async def gather_outcomes(
    tasks: Mapping[str, Awaitable[Any]],
) -> tuple[list[TaskOutcome], list[tuple[str, Exception]]]:
    """Run `tasks` concurrently and wait for all of them.

    Returns the outcomes in launch order and the failures in the order they
    happened.
    """

    failures: list[tuple[str, Exception]] = []

    async def run_one(name: str, awaitable: Awaitable[Any]) -> TaskOutcome:
        started = time.perf_counter()
        try:
            result = await awaitable
        except Exception as exc:
            failures.append((name, exc))
            logger.warning("Task {} failed: {}", name, exc)
            return TaskOutcome(
                name=name,
                ok=False,
                error=str(exc),
                duration_seconds=time.perf_counter() - started,
            )
        output = result if isinstance(result, str) else None
        return TaskOutcome(
            name=name,
            ok=True,
            output=_clip(output) if output else output,
            duration_seconds=time.perf_counter() - started,
        )

    outcomes = await asyncio.gather(*(run_one(name, aw) for name, aw in tasks.items()))
    return list(outcomes), failures


async def run_all(
    tasks: Mapping[str, Awaitable[Any]],
    *,
    phase: Phase | None = None,
) -> list[TaskOutcome]:
    """Join-all with first-error semantics.

    Raises `TaskGroupError` (chained to the first failure) when any task
    failed; the error carries every outcome.
    """

    label = phase.value if phase else "tasks"
    logger.info("Running {} {} concurrently: {}", len(tasks), label, ", ".join(tasks))
    outcomes, failures = await gather_outcomes(tasks)
    if failures:
        error = TaskGroupError(failures, outcomes=outcomes)
        raise error from failures[0][1]
    return outcomes
