from __future__ import annotations

import gc
import asyncio

import pytest

from chatstream.stream.outcome import OneShotOutcome


@pytest.mark.asyncio
async def test_outcome_resolves_once() -> None:
    outcome: OneShotOutcome[str] = OneShotOutcome()
    assert outcome.settled is False
    assert outcome.resolve("first") is True
    assert outcome.resolve("second") is False
    assert outcome.reject(RuntimeError("late")) is False
    assert outcome.settled is True
    assert await outcome.wait() == "first"


@pytest.mark.asyncio
async def test_outcome_rejects_once() -> None:
    outcome: OneShotOutcome[str] = OneShotOutcome()
    assert outcome.reject(ValueError("boom")) is True
    assert outcome.resolve("ignored") is False
    with pytest.raises(ValueError, match="boom"):
        await outcome.wait()


@pytest.mark.asyncio
async def test_outcome_waiters_see_the_same_value() -> None:
    outcome: OneShotOutcome[int] = OneShotOutcome()
    waiters = [asyncio.create_task(outcome.wait()) for _ in range(3)]
    await asyncio.sleep(0)
    outcome.resolve(7)
    assert await asyncio.gather(*waiters) == [7, 7, 7]


@pytest.mark.asyncio
async def test_unawaited_rejection_is_not_reported_as_lost() -> None:
    loop = asyncio.get_running_loop()
    reported: list[dict] = []
    previous = loop.get_exception_handler()
    loop.set_exception_handler(lambda _loop, context: reported.append(context))
    try:
        outcome: OneShotOutcome[str] = OneShotOutcome()
        outcome.reject(RuntimeError("nobody is listening"))
        await asyncio.sleep(0)
        del outcome
        gc.collect()
    finally:
        loop.set_exception_handler(previous)

    assert reported == []
