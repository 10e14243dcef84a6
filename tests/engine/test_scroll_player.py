"""
Tests for the asyncio scroll preview ticker.
"""

import asyncio

import pytest

from neomatrix.engine.scroll_player import ScrollPlayer
from neomatrix.models.domain import Animation
from neomatrix.models.errors import EmptyAnimationError

from conftest import GREEN, RED, make_animation, make_frame


@pytest.mark.asyncio
async def test_start_and_stop(two_pixel_animation):
    frames = []
    player = ScrollPlayer(on_frame=frames.append)

    assert await player.start(two_pixel_animation, delay_ms=1) is True
    await asyncio.sleep(0.05)
    assert player.is_running
    assert player.tick_count >= 2
    assert player.last_strip is not None

    assert await player.stop() is True
    assert not player.is_running
    ticks = player.tick_count
    await asyncio.sleep(0.02)
    assert player.tick_count == ticks
    assert len(frames) == ticks


@pytest.mark.asyncio
async def test_start_while_running_is_noop(two_pixel_animation):
    player = ScrollPlayer()
    await player.start(two_pixel_animation, delay_ms=1000)
    first_task = player._task

    assert await player.start(two_pixel_animation, delay_ms=1) is False
    assert player._task is first_task
    assert player.delay_ms == 1000

    await player.stop()


@pytest.mark.asyncio
async def test_start_empty_animation_rejected():
    player = ScrollPlayer()
    with pytest.raises(EmptyAnimationError):
        await player.start(Animation())
    assert not player.is_running


@pytest.mark.asyncio
async def test_stop_without_start():
    assert await ScrollPlayer().stop() is False


@pytest.mark.asyncio
async def test_restart_applies_new_delay(two_pixel_animation):
    player = ScrollPlayer()
    await player.start(two_pixel_animation, delay_ms=1000)
    assert await player.restart(two_pixel_animation, delay_ms=5) is True
    assert player.delay_ms == 5
    assert player.is_running
    await player.stop()


@pytest.mark.asyncio
async def test_uses_animation_step_delay_by_default():
    animation = make_animation([make_frame("A", (0, 0, RED))], step_delay_ms=350)
    player = ScrollPlayer()
    await player.start(animation)
    assert player.delay_ms == 350
    await player.stop()


@pytest.mark.asyncio
async def test_invalidate_rebuilds_layout(two_pixel_animation):
    player = ScrollPlayer()
    await player.start(two_pixel_animation, delay_ms=1000)
    assert player.scroller.mega.max_col == 1

    edited = make_animation([make_frame("A", (0, 0, RED), (0, 5, GREEN))])
    player.invalidate(edited)
    assert player.scroller.mega.max_col == 5

    # nothing lit any more -> preview stops
    player.invalidate(Animation())
    await asyncio.sleep(0)
    assert not player.is_running


@pytest.mark.asyncio
async def test_step_delay_edit_applies_immediately():
    from neomatrix.services.editor_service import EditorService

    editor = EditorService(make_animation([make_frame("A", (0, 0, RED))], step_delay_ms=2000))
    player = ScrollPlayer()
    editor.subscribe(player.on_editor_change)
    await player.start(editor.animation)
    await asyncio.sleep(0.01)
    slow_task = player._task

    editor.set_step_delay(50)
    assert player.delay_ms == 50
    assert player._task is not slow_task
    assert player.is_running

    ticks = player.tick_count
    await asyncio.sleep(0.5)
    assert player.tick_count - ticks >= 5

    await player.stop()
    assert slow_task.cancelled()


@pytest.mark.asyncio
async def test_explicit_delay_survives_step_delay_edit(two_pixel_animation):
    player = ScrollPlayer()
    await player.start(two_pixel_animation, delay_ms=1000)
    task = player._task

    edited = two_pixel_animation.snapshot()
    edited.step_delay_ms = 80
    player.invalidate(edited)

    assert player.delay_ms == 1000
    assert player._task is task
    await player.stop()


def test_step_is_synchronous(two_pixel_animation):
    from neomatrix.engine.marquee import MarqueeScroller

    player = ScrollPlayer()
    player.scroller = MarqueeScroller.from_frames(two_pixel_animation.frames, two_pixel_animation.grid)
    player.step()
    strip = player.step()
    assert strip[7] == RED
    assert player.tick_count == 2
