"""
Tests for FrameStore pixel and frame-list operations.
"""

import pytest

from neomatrix.engine.frame_store import FrameStore
from neomatrix.models.color import Color
from neomatrix.models.domain import Animation
from neomatrix.models.enums import Orientation
from neomatrix.models.errors import (
    FrameIndexError, GridSizeError, LastFrameError, StepDelayError
)

from conftest import GREEN, RED, make_animation, make_frame


@pytest.fixture
def store():
    return FrameStore(Animation())


class TestToggle:

    def test_absent_cell_is_lit_with_draw_color(self, store):
        pixel = store.toggle_pixel(2, 3)
        assert pixel.cell == (2, 3)
        assert pixel.color == RED
        assert len(store.animation.current_frame.coords) == 1

    def test_same_color_removes(self, store):
        store.toggle_pixel(2, 3)
        assert store.toggle_pixel(2, 3) is None
        assert store.animation.current_frame.is_empty

    def test_other_color_recolors_in_place(self, store):
        store.toggle_pixel(0, 0)
        store.toggle_pixel(1, 1)
        store.set_draw_color(GREEN)
        pixel = store.toggle_pixel(0, 0)

        coords = store.animation.current_frame.coords
        assert pixel.color == GREEN
        assert [p.cell for p in coords] == [(0, 0), (1, 1)]
        assert coords[0].color == GREEN

    def test_explicit_frame_index(self, store):
        store.add_frame()
        store.toggle_pixel(4, 4, frame_index=0)
        assert len(store.animation.frames[0].coords) == 1
        assert store.animation.frames[1].is_empty

    def test_bad_frame_index(self, store):
        with pytest.raises(FrameIndexError):
            store.toggle_pixel(0, 0, frame_index=3)


class TestFrames:

    def test_add_frame_appends_and_selects(self, store):
        index = store.add_frame()
        assert index == 1
        assert store.animation.current_index == 1
        assert store.animation.frames[1].name == "Frame 2"

    def test_duplicate_inserts_copy_after_source(self, store):
        store.toggle_pixel(0, 0)
        store.add_frame()
        index = store.duplicate_frame(0)

        frames = store.animation.frames
        assert index == 1
        assert [f.name for f in frames] == ["Frame 1", "Frame 1 copy", "Frame 2"]
        assert store.animation.current_index == 1
        assert frames[1].coords == frames[0].coords
        assert frames[1].coords is not frames[0].coords

    def test_delete_last_frame_rejected(self, store):
        with pytest.raises(LastFrameError):
            store.delete_frame(0)
        assert store.animation.frame_count == 1

    def test_delete_clamps_selection(self, store):
        store.add_frame()
        store.add_frame()
        assert store.animation.current_index == 2
        store.delete_frame(2)
        assert store.animation.current_index == 1
        assert store.animation.frame_count == 2

    def test_delete_before_selection_keeps_selected_frame(self, store):
        store.add_frame()
        store.add_frame()
        store.delete_frame(0)
        assert store.animation.current_frame.name == "Frame 3"

    def test_reorder_selection_follows_moved_frame(self):
        animation = make_animation([make_frame("A"), make_frame("B"), make_frame("C")])
        store = FrameStore(animation)
        store.reorder_frame(0, 2)

        assert [f.name for f in animation.frames] == ["B", "C", "A"]
        assert animation.current_frame.name == "A"
        assert animation.current_index == 2

    def test_reorder_bad_index(self, store):
        with pytest.raises(FrameIndexError):
            store.reorder_frame(0, 5)

    def test_clear_empty_frame_is_noop(self, store):
        assert store.clear_frame() is False
        store.toggle_pixel(1, 1)
        assert store.clear_frame() is True
        assert store.animation.current_frame.is_empty

    def test_navigation(self, store):
        assert store.previous_frame() is False
        store.add_frame()
        assert store.next_frame() is False
        assert store.previous_frame() is True
        assert store.animation.current_index == 0

    def test_rename_blank_resets_default_name(self, store):
        store.rename_frame(0, "Heart")
        assert store.animation.frames[0].name == "Heart"
        store.rename_frame(0, "   ")
        assert store.animation.frames[0].name == "Frame 1"


class TestSettings:

    def test_step_delay_minimum(self, store):
        with pytest.raises(StepDelayError):
            store.set_step_delay(49)
        store.set_step_delay(50)
        assert store.animation.step_delay_ms == 50

    @pytest.mark.parametrize("width,height", [(0, 8), (8, 0), (65, 8), (8, 65)])
    def test_resize_out_of_range_changes_nothing(self, width, height):
        animation = make_animation([make_frame("Frame 1", (0, 0, RED))])
        store = FrameStore(animation)
        with pytest.raises(GridSizeError):
            store.resize_grid(width, height)
        assert (animation.grid.width, animation.grid.height) == (8, 8)
        assert len(animation.frames[0].coords) == 1

    def test_resize_clears_pixels_and_selects_first_frame(self):
        animation = make_animation([make_frame("A", (0, 0, RED)), make_frame("B", (1, 1, RED))])
        animation.current_index = 1
        store = FrameStore(animation)

        assert store.resize_grid(16, 4) is True
        assert (animation.grid.width, animation.grid.height) == (16, 4)
        assert all(f.is_empty for f in animation.frames)
        assert animation.current_index == 0

    def test_resize_same_size_is_noop(self):
        animation = make_animation([make_frame("A", (0, 0, RED))])
        assert FrameStore(animation).resize_grid(8, 8) is False
        assert len(animation.frames[0].coords) == 1

    def test_orientation_change_clears_pixels(self):
        animation = make_animation([make_frame("A", (0, 0, RED))])
        store = FrameStore(animation)
        assert store.set_orientation("bottom-right") is True
        assert animation.grid.orientation == Orientation.BOTTOM_RIGHT
        assert animation.frames[0].is_empty

    def test_draw_color_accepts_hex(self, store):
        store.set_draw_color("#00F")
        assert store.animation.draw_color == Color(0, 0, 255)
