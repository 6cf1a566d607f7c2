# tests/test_chat_throttle.py

import asyncio

import pytest

from agent.scheduler import Scheduler
from chat.throttle import ChatThrottle


@pytest.mark.asyncio
async def test_cooldown_expires() -> None:
    throttle = ChatThrottle(Scheduler(), cooldown_s=0.02)

    assert throttle.try_acquire("Steve")
    throttle.release("Steve")
    assert not throttle.try_acquire("Alex")

    await asyncio.sleep(0.05)

    assert not throttle.cooldown_active
    assert throttle.try_acquire("Alex")


@pytest.mark.asyncio
async def test_pending_is_per_sender() -> None:
    throttle = ChatThrottle(Scheduler(), cooldown_s=0)

    assert throttle.try_acquire("Steve")
    assert throttle.is_pending("Steve")
    assert not throttle.try_acquire("Steve")
    assert throttle.try_acquire("Alex")
    assert throttle.pending == {"Steve", "Alex"}

    throttle.release("Steve")
    assert throttle.try_acquire("Steve")


@pytest.mark.asyncio
async def test_reset_cooldown_keeps_pending_senders() -> None:
    throttle = ChatThrottle(Scheduler(), cooldown_s=10)
    throttle.try_acquire("Steve")

    throttle.reset_cooldown()

    assert not throttle.cooldown_active
    assert throttle.pending == {"Steve"}
    assert not throttle.try_acquire("Steve")
    assert throttle.try_acquire("Alex")
    throttle.reset_cooldown()
    throttle.reset_cooldown()
