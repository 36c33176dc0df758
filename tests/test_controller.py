"""Tests for the animation controller."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from tiranga.animation.controller import (
    TEXT_COLOR,
    AnimationController,
    max_visible_lines,
)
from tiranga.animation.flag import NAVY_BLUE, SAFFRON, wave_offset
from tiranga.animation.listing import load_listing
from tiranga.core.events import EventType, tick_event
from tiranga.core.state import Phase
from tiranga.graphics.surface import BufferSurface

from conftest import tick


def render(controller: AnimationController, width: int = 800, height: int = 600) -> np.ndarray:
    surface = BufferSurface(width, height)
    controller.render(surface)
    return surface.get_buffer()


def has_color(buffer: np.ndarray, color) -> bool:
    return bool((buffer == color).all(axis=2).any())


class TestMaxVisibleLines:
    def test_default_window(self):
        assert max_visible_lines(600) == (600 - 40) // 15

    def test_height_for_five_lines(self):
        assert max_visible_lines(115) == 5

    @pytest.mark.parametrize("height", [0, -10, 20, 39])
    def test_tiny_or_empty_surface_clamps_to_zero(self, height):
        assert max_visible_lines(height) == 0

    def test_zero_line_height(self):
        assert max_visible_lines(600, line_height=0) == 0


class TestTicking:
    def test_reveals_one_line_per_tick(self, controller):
        for n in range(1, 11):
            controller.on_tick()
            assert controller.state.text.revealed_lines == n
            assert controller.phase is Phase.DISPLAYING_TEXT

    def test_full_sequence(self, controller):
        tick(controller, 10 + 61)
        assert controller.phase is Phase.DRAWING_FLAG
        assert controller.state.flag.progress_columns == 0

        tick(controller, 59)
        assert controller.phase is Phase.DRAWING_FLAG
        assert controller.state.flag.progress_columns == 590

        controller.on_tick()
        assert controller.phase is Phase.WAVING_FLAG
        assert controller.state.flag.progress_columns == 600

        controller.on_tick()
        assert controller.state.wave.phase == 5.0

    def test_accepts_tick_event(self, controller, event_bus):
        event_bus.subscribe(EventType.TICK, controller.on_tick)
        event_bus.emit(tick_event(0.025, 0))
        assert controller.state.text.revealed_lines == 1

    def test_negative_flag_width_clamped(self, lines):
        controller = AnimationController(lines=lines, flag_width=-5)
        assert controller.flag_width == 0


class TestRedrawRequests:
    async def test_each_tick_queues_one_redraw(self, lines, event_bus):
        controller = AnimationController(lines=lines, event_bus=event_bus)
        tick(controller, 3)
        assert event_bus.pending == 3
        assert event_bus.get_history(EventType.REDRAW) == []

        await event_bus.process_queue()
        assert event_bus.pending == 0
        assert len(event_bus.get_history(EventType.REDRAW)) == 3

    async def test_redraw_reaches_subscriber(self, controller):
        redraws = []
        controller.event_bus.subscribe(EventType.REDRAW, redraws.append)
        controller.on_tick()
        assert redraws == []
        await controller.event_bus.process_queue()
        assert [e.source for e in redraws] == ["controller"]

    def test_default_bus(self, lines):
        assert AnimationController(lines=lines).event_bus is not None


class TestPhaseListeners:
    def test_listener_sees_each_transition_once(self, controller):
        seen = []
        controller.add_listener(lambda old, new, state: seen.append((old, new)))
        tick(controller, 10 + 61 + 60 + 20)
        assert seen == [
            (Phase.DISPLAYING_TEXT, Phase.DRAWING_FLAG),
            (Phase.DRAWING_FLAG, Phase.WAVING_FLAG),
        ]

    def test_listener_gets_new_snapshot(self, controller):
        snapshots = []
        controller.add_listener(lambda old, new, state: snapshots.append(state))
        tick(controller, 71)
        assert snapshots[0].phase is Phase.DRAWING_FLAG

    def test_removed_listener_not_called(self, controller):
        seen = []

        def listener(old, new, state):
            seen.append(new)

        controller.add_listener(listener)
        controller.remove_listener(listener)
        tick(controller, 71)
        assert seen == []

    def test_failing_listener_is_logged(self, controller, caplog):
        def boom(old, new, state):
            raise RuntimeError("boom")

        controller.add_listener(boom)
        with caplog.at_level(logging.ERROR):
            tick(controller, 71)
        assert controller.phase is Phase.DRAWING_FLAG
        assert "boom" in caplog.text

    async def test_phase_changed_event(self, lines, event_bus):
        controller = AnimationController(lines=lines, event_bus=event_bus)
        tick(controller, 71)
        await event_bus.process_queue()
        events = event_bus.get_history(EventType.PHASE_CHANGED)
        assert len(events) == 1
        assert events[0].data == {"from": Phase.DISPLAYING_TEXT, "to": Phase.DRAWING_FLAG}


class TestVisibleWindow:
    def test_scroll_scenario(self, controller):
        tick(controller, 3)
        assert controller.visible_window(115) == range(0, 3)
        tick(controller, 5)
        assert controller.visible_window(115) == range(3, 8)

    def test_no_scroll_when_everything_fits(self, controller):
        tick(controller, 10)
        assert controller.visible_window(600) == range(0, 10)

    def test_zero_height_shows_nothing(self, controller):
        tick(controller, 4)
        assert len(controller.visible_window(0)) == 0

    def test_window_never_exceeds_capacity(self, controller):
        for _ in range(10):
            controller.on_tick()
            assert len(controller.visible_window(115)) <= 5


class TestRender:
    def test_initial_frame_is_blank(self, controller):
        assert not render(controller).any()

    def test_text_phase_draws_green_text(self, controller):
        tick(controller, 3)
        assert has_color(render(controller), TEXT_COLOR)

    def test_render_is_repeatable(self, controller):
        for n in (3, 68, 40, 40):
            tick(controller, n)
            first = render(controller)
            second = render(controller)
            assert np.array_equal(first, second)

    def test_render_does_not_change_state(self, controller):
        tick(controller, 80)
        before = controller.state
        render(controller)
        assert controller.state is before

    def test_text_drawn_from_one_snapshot(self, controller, lines):
        class TickOnClear(BufferSurface):
            def __init__(self):
                super().__init__(100, 115)
                self.drawn = []

            def clear(self, color=(0, 0, 0)):
                controller.on_tick()
                super().clear(color)

            def draw_text(self, text, position, font, color):
                self.drawn.append(text)
                super().draw_text(text, position, font, color)

        tick(controller, 3)
        surface = TickOnClear()
        controller.render(surface)
        assert controller.state.text.revealed_lines == 4
        assert surface.drawn == list(lines[:3])

    def test_drawing_phase_paints_from_the_left(self, controller):
        tick(controller, 71 + 1)
        buffer = render(controller)
        # 800x600 surface puts the flag at (100, 100)
        assert tuple(buffer[150, 105]) == SAFFRON
        assert not buffer[150, 110].any()

    def test_waving_phase_draws_whole_flag_and_emblem(self, controller):
        tick(controller, 71 + 60)
        assert controller.state.wave.phase == 0.0
        buffer = render(controller)
        assert tuple(buffer[100, 100]) == SAFFRON
        assert tuple(buffer[150, 699]) != (0, 0, 0)
        emblem_y = 300 + int(wave_offset(300, 0.0))
        assert tuple(buffer[emblem_y, 400]) == NAVY_BLUE

    def test_wave_offsets_columns(self, controller):
        tick(controller, 71 + 60)
        buffer = render(controller)
        x = round((math.pi / 2) / 0.02)
        top = 100 + int(wave_offset(x, 0.0))
        assert top == 114
        assert tuple(buffer[top, 100 + x]) == SAFFRON
        assert not buffer[top - 1, 100 + x].any()

    def test_zero_sized_surface(self, controller):
        tick(controller, 5)
        surface = BufferSurface(0, 0)
        controller.render(surface)
        assert surface.get_buffer().size == 0

    def test_surface_smaller_than_flag_is_clipped(self, controller):
        tick(controller, 71 + 60)
        buffer = render(controller, 200, 100)
        assert buffer.shape == (100, 200, 3)
        assert buffer.any()


class TestDefaultListing:
    def test_uses_own_source(self):
        controller = AnimationController()
        assert controller.lines == load_listing()
        assert any("class AnimationController" in line for line in controller.lines)
