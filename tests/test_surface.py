"""Tests for the drawing surfaces."""

from __future__ import annotations

import numpy as np
import pygame
import pytest

from tiranga.graphics.surface import BufferSurface, FontSpec, PygameSurface

BLUE = (0, 0, 255)


class TestBufferSurface:
    def test_dimensions(self):
        surface = BufferSurface(30, 20)
        assert (surface.width, surface.height) == (30, 20)
        assert surface.get_buffer().shape == (20, 30, 3)

    def test_negative_dimensions_clamped(self):
        surface = BufferSurface(-5, -1)
        assert (surface.width, surface.height) == (0, 0)
        surface.draw_line((0, 0), (10, 10), BLUE)
        surface.draw_filled_circle((0, 0), 3, BLUE)

    def test_get_buffer_is_a_copy(self):
        surface = BufferSurface(10, 10)
        surface.get_buffer()[:, :] = BLUE
        assert not surface.get_buffer().any()

    def test_text_sits_on_baseline(self):
        surface = BufferSurface(40, 20)
        surface.draw_text("H", (2, 10), FontSpec("monospace", 12), BLUE)
        rows = np.nonzero(surface.get_buffer().any(axis=2))[0]
        assert rows.min() == 5
        assert rows.max() == 9

    def test_clear(self):
        surface = BufferSurface(5, 5)
        surface.clear(BLUE)
        assert (surface.get_buffer() == BLUE).all()

    def test_circles(self):
        surface = BufferSurface(40, 40)
        surface.draw_circle_outline((20, 20), 10, BLUE, 2)
        surface.draw_filled_circle((20, 20), 2, BLUE)
        buffer = surface.get_buffer()
        assert tuple(buffer[20, 30]) == BLUE
        assert tuple(buffer[20, 20]) == BLUE
        assert not buffer[20, 25].any()


class TestPygameSurface:
    @pytest.fixture
    def surface(self) -> PygameSurface:
        return PygameSurface(pygame.Surface((40, 30)))

    def test_dimensions(self, surface):
        assert (surface.width, surface.height) == (40, 30)

    def test_line(self, surface):
        surface.draw_line((5, 2), (5, 20), BLUE)
        assert surface._surface.get_at((5, 10)).b > 0
        assert tuple(surface._surface.get_at((8, 10)))[:3] == (0, 0, 0)

    def test_hairlines_are_antialiased(self, surface, monkeypatch):
        calls = []
        monkeypatch.setattr(pygame.draw, "aaline", lambda *args: calls.append(args))
        surface.draw_line((1, 1), (30, 20), BLUE)
        assert calls == [(surface._surface, BLUE, (1, 1), (30, 20))]

    def test_thick_lines_use_plain_line(self, surface, monkeypatch):
        calls = []
        monkeypatch.setattr(pygame.draw, "aaline", lambda *args: calls.append(args))
        surface.draw_line((5, 2), (5, 20), BLUE, 2)
        assert calls == []
        assert tuple(surface._surface.get_at((5, 10)))[:3] == BLUE

    def test_circles(self, surface):
        surface.draw_filled_circle((20, 15), 3, BLUE)
        surface.draw_circle_outline((20, 15), 10, BLUE, 2)
        assert tuple(surface._surface.get_at((20, 15)))[:3] == BLUE
        assert tuple(surface._surface.get_at((20, 10)))[:3] == (0, 0, 0)

    def test_clear(self, surface):
        surface.clear(BLUE)
        assert tuple(surface._surface.get_at((0, 0)))[:3] == BLUE

    def test_text_draws_and_caches_font(self, surface):
        pygame.font.init()
        font = FontSpec("monospace", 12)
        surface.draw_text("hello", (2, 20), font, (255, 255, 255))
        surface.draw_text("again", (2, 20), font, (255, 255, 255))
        assert list(surface._fonts) == [font]
        pixels = pygame.surfarray.array3d(surface._surface)
        assert pixels.any()

    def test_empty_text_is_noop(self, surface):
        surface.draw_text("", (2, 20), FontSpec(), (255, 255, 255))
        assert surface._fonts == {}
