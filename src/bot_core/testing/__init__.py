# src/bot_core/testing/__init__.py

from .fakes import FakePathfinder, FakeWorld, SubmittedGoal

__all__ = ["FakePathfinder", "FakeWorld", "SubmittedGoal"]
