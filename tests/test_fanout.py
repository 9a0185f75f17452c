from __future__ import annotations

import asyncio

import pytest

from athame.core.domain.phase import Phase
from athame.core.errors import TaskGroupError
from athame.core.services.fanout import gather_outcomes, run_all


async def _ok(value: str, delay: float = 0.0) -> str:
    await asyncio.sleep(delay)
    return value


async def _fail(message: str, delay: float = 0.0) -> str:
    await asyncio.sleep(delay)
    raise RuntimeError(message)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_all_succeed_in_launch_order():
    outcomes = await run_all({"slow": _ok("a", 0.03), "fast": _ok("b")}, phase=Phase.VERIFY)
    assert [o.name for o in outcomes] == ["slow", "fast"]
    assert all(o.ok for o in outcomes)
    assert [o.output for o in outcomes] == ["a", "b"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_empty_mapping_succeeds():
    assert await run_all({}) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failure_does_not_cancel_siblings():
    finished: list[str] = []

    async def slow() -> str:
        await asyncio.sleep(0.05)
        finished.append("slow")
        return "done"

    with pytest.raises(TaskGroupError) as info:
        await run_all({"broken": _fail("boom"), "slow": slow()})

    assert finished == ["slow"]
    outcomes = {o.name: o for o in info.value.outcomes}
    assert outcomes["slow"].ok is True
    assert outcomes["broken"].ok is False
    assert outcomes["broken"].error == "boom"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_first_failure_in_time_wins():
    with pytest.raises(TaskGroupError) as info:
        await run_all({"late": _fail("late", 0.05), "early": _fail("early", 0.01), "fine": _ok("x")})

    error = info.value
    assert error.failed_names == ["early", "late"]
    assert str(error.first) == "early"
    assert error.__cause__ is error.first
    assert str(error) == "early: early (+1 more)"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_gather_outcomes_never_raises():
    outcomes, failures = await gather_outcomes({"a": _fail("x"), "b": _ok("y")})
    assert [o.ok for o in outcomes] == [False, True]
    assert [name for name, _ in failures] == ["a"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_long_output_is_clipped():
    outcomes = await run_all({"noisy": _ok("x" * 10_000)})
    assert len(outcomes[0].output) <= 4_000
