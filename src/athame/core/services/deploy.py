"""Deploying one published address to several targets.

Every target receives the address string exactly as the registry returned
it. In concurrent mode every target is attempted and the first failure is
raised once all have finished; in sequential mode the first failure stops
the remaining targets. A published image is never rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from athame.core.domain.models import DeployResult, PhaseResult, TaskOutcome
from athame.core.errors import DeployError
from athame.core.interfaces.deploy_target import DeployTarget
from athame.core.services import fanout
from athame.core.services.pipeline import PipelineRun


async def _deploy_one(
    run: PipelineRun,
    target: DeployTarget,
    address: str,
    results: list[DeployResult],
) -> DeployResult:
    try:
        result = await target.deploy(address)
    except Exception:
        await run.notify_failed(f"{target.label} Deploy Failed")
        raise
    message, markdown = target.completion_message()
    await run.notify_completed(
        f"{target.label} Deploy Completed",
        message,
        markdown=markdown,
        view_url=target.url,
    )
    run.record_deployment(result)
    results.append(result)
    logger.info("Deployed {} to {}", address, target.label)
    return result


def _task_keys(targets: Sequence[DeployTarget]) -> list[str]:
    """One task name per target; repeated target names get a `#n` suffix."""

    keys: list[str] = []
    for target in targets:
        key, count = target.name, 1
        while key in keys:
            count += 1
            key = f"{target.name}#{count}"
        keys.append(key)
    return keys


def _deploy_error(target: DeployTarget, exc: Exception, address: str) -> DeployError:
    return DeployError(
        f"{target.label.lower()} deploy failed: {exc}",
        target=target.name,
        address=address,
    )


async def deploy_to_targets(
    run: PipelineRun,
    address: str,
    targets: Sequence[DeployTarget],
    *,
    concurrent: bool = True,
    phase_result: PhaseResult | None = None,
) -> list[DeployResult]:
    """Deploy `address` to `targets`; raises `DeployError` for the first failure."""

    if not targets:
        logger.info("No deploy targets configured")
        return []

    keyed = dict(zip(_task_keys(targets), targets))
    results: list[DeployResult] = []
    outcomes: list[TaskOutcome] = []
    failures: list[tuple[str, Exception]] = []

    if concurrent:
        outcomes, failures = await fanout.gather_outcomes(
            {key: _deploy_one(run, target, address, results) for key, target in keyed.items()}
        )
    else:
        for key, target in keyed.items():
            step, step_failures = await fanout.gather_outcomes({key: _deploy_one(run, target, address, results)})
            outcomes.extend(step)
            if step_failures:
                failures = step_failures
                break

    if phase_result is not None:
        phase_result.tasks = outcomes
    if failures:
        name, exc = failures[0]
        raise _deploy_error(keyed[name], exc, address) from exc
    return results
