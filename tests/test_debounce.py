"""Tests for search debouncing."""

import asyncio

from hotel_directory.client.debounce import Debouncer, debounce_schedule


def test_rapid_keystrokes_fire_once_with_last_value() -> None:
    events = [(0.0, "a"), (0.25, "ab"), (0.5, "abc")]

    assert debounce_schedule(events, window=0.5) == [(1.0, "abc")]


def test_quiet_gaps_fire_each_value() -> None:
    events = [(0.0, "a"), (1.0, "ab"), (1.25, "abc")]

    assert debounce_schedule(events, window=0.5) == [(0.5, "a"), (1.75, "abc")]


def test_no_events_fire_nothing() -> None:
    assert debounce_schedule([], window=0.5) == []


def test_debouncer_runs_only_the_last_action() -> None:
    fired: list[str] = []

    def record(value: str):  # type: ignore[no-untyped-def]
        async def action() -> None:
            fired.append(value)

        return action

    async def scenario() -> None:
        debouncer = Debouncer(0.01)
        for value in ("a", "ab", "abc"):
            debouncer.schedule(record(value))
        assert debouncer.pending
        await debouncer.drain()
        assert not debouncer.pending

    asyncio.run(scenario())

    assert fired == ["abc"]


def test_cancel_drops_waiting_action() -> None:
    fired: list[str] = []

    async def action() -> None:
        fired.append("fired")

    async def scenario() -> None:
        debouncer = Debouncer(0.01)
        debouncer.schedule(action)
        debouncer.cancel()
        await debouncer.drain()

    asyncio.run(scenario())

    assert fired == []


def test_fired_action_is_not_cancelled_by_new_schedule() -> None:
    fired: list[str] = []

    async def scenario() -> None:
        release = asyncio.Event()
        debouncer = Debouncer(0)

        async def slow() -> None:
            await release.wait()
            fired.append("slow")

        async def fast() -> None:
            fired.append("fast")

        debouncer.schedule(slow)
        await asyncio.sleep(0.01)
        debouncer.schedule(fast)
        release.set()
        await debouncer.drain()

    asyncio.run(scenario())

    assert sorted(fired) == ["fast", "slow"]
