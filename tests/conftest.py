"""Pytest fixtures for tiranga tests."""

from __future__ import annotations

import os

# Headless pygame for window tests; must be set before pygame is imported
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from tiranga.animation.controller import AnimationController
from tiranga.core.events import EventBus


TEN_LINES = tuple(f"line {i}" for i in range(10))


@pytest.fixture
def lines() -> tuple[str, ...]:
    return TEN_LINES


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def controller(lines) -> AnimationController:
    return AnimationController(lines=lines)


def tick(controller: AnimationController, n: int) -> None:
    for _ in range(n):
        controller.on_tick()
