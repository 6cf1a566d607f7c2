# tests/test_anti_afk.py

import asyncio
import random

import pytest

from agent.scheduler import Scheduler
from bot_core.anti_afk import AntiAfk
from bot_core.testing import FakeWorld


def make_anti_afk() -> tuple[AntiAfk, FakeWorld, Scheduler]:
    world = FakeWorld()
    scheduler = Scheduler()
    return AntiAfk(world, scheduler, rng=random.Random(7)), world, scheduler


@pytest.mark.asyncio
async def test_each_action_drives_the_world() -> None:
    anti_afk, world, scheduler = make_anti_afk()

    await anti_afk.perform("swing")
    await anti_afk.perform("look")
    await anti_afk.perform("small_move")

    assert world.swings == 1
    yaw, pitch = world.looked[0]
    assert 0 <= yaw <= 2 * 3.1416
    assert -1.5708 <= pitch <= 1.5708
    direction, pressed = world.control_log[0]
    assert direction in ("forward", "back", "left", "right") and pressed
    scheduler.cancel_all()


@pytest.mark.asyncio
async def test_held_controls_are_released() -> None:
    anti_afk, world, _ = make_anti_afk()

    await anti_afk.perform("jump")
    assert world.controls == {"jump": True}

    await asyncio.sleep(0.6)

    assert world.controls == {"jump": False}
    assert world.control_log == [("jump", True), ("jump", False)]


@pytest.mark.asyncio
async def test_schedule_runs_until_stopped() -> None:
    anti_afk, world, scheduler = make_anti_afk()

    anti_afk.start(0.01)
    await asyncio.sleep(0.1)
    assert anti_afk.stop() is True

    performed = world.swings + len(world.looked) + sum(1 for _, on in world.control_log if on)
    assert performed >= 1
    assert anti_afk.stop() is False
    assert anti_afk.interval_s is None
    scheduler.cancel_all()


@pytest.mark.asyncio
async def test_restart_replaces_schedule() -> None:
    anti_afk, _, scheduler = make_anti_afk()

    anti_afk.start(30)
    anti_afk.start(10)

    names = [h.name for h in scheduler.active_handles()]
    assert names == ["anti-afk"]
    assert anti_afk.interval_s == 10

    with pytest.raises(ValueError):
        anti_afk.start(0)
    scheduler.cancel_all()
