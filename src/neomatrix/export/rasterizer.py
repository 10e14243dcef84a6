"""
Rasterizer - renders one seamless marquee cycle into GIF frames
"""

from typing import Iterator, List, Sequence, Tuple

from neomatrix.engine.marquee import MarqueeScroller, Strip
from neomatrix.export.gif_encoder import GifEncoder, build_palette
from neomatrix.models.color import Color
from neomatrix.models.domain import Animation, GridConfig
from neomatrix.models.errors import EmptyAnimationError
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GIF)

DEFAULT_CELL_SCALE = 20


def rasterize_strip(strip: Strip, width: int, height: int, scale: int) -> List[Color]:
    """
    LED strip -> row-major bitmap of (width * scale) x (height * scale)

    LED i is drawn as a scale x scale block at (x = i % width, y = i // width).
    Unlit LEDs and the background are black.
    """
    black = Color.black()
    image_width = width * scale
    bitmap = [black] * (image_width * height * scale)

    for i, color in enumerate(strip):
        if color is None:
            continue
        x0 = (i % width) * scale
        y0 = (i // width) * scale
        row_run = [color] * scale
        for dy in range(scale):
            start = (y0 + dy) * image_width + x0
            bitmap[start:start + scale] = row_run

    return bitmap


def _scroller_for(animation: Animation) -> MarqueeScroller:
    try:
        return MarqueeScroller.from_frames(animation.frames, animation.grid)
    except EmptyAnimationError:
        raise EmptyAnimationError("export") from None


def scroll_strips(animation: Animation) -> List[Strip]:
    """LED strip for every offset of one scroll cycle (unscaled)"""
    scroller = _scroller_for(animation)
    return [scroller.render(offset) for offset in scroller.cycle_offsets()]


def strip_palette(strips: Sequence[Strip]) -> List[Color]:
    """
    GIF palette for rasterized strips

    Scaling keeps the row-major first-seen order of LED colors, so the
    palette can be built from the small strips instead of the bitmaps.
    """
    return build_palette([[color for color in strip if color is not None] for strip in strips])


def render_scroll_frames(animation: Animation, cell_scale: int = DEFAULT_CELL_SCALE) -> Iterator[Tuple[List[Color], int]]:
    """
    (bitmap, delay_ms) for every offset of one scroll cycle

    Validation happens on the call; bitmaps are produced one at a time as
    the returned iterator is consumed.
    """
    if cell_scale < 1:
        raise ValueError(f"Cell scale must be >= 1 (got {cell_scale})")

    snapshot = animation.snapshot()
    return _rasterize_all(scroll_strips(snapshot), snapshot.grid, cell_scale, snapshot.step_delay_ms)


def _rasterize_all(strips: Sequence[Strip], grid: GridConfig, cell_scale: int, delay_ms: int):
    for strip in strips:
        yield rasterize_strip(strip, grid.width, grid.height, cell_scale), delay_ms


def render_scroll_gif(animation: Animation, cell_scale: int = DEFAULT_CELL_SCALE) -> bytes:
    """
    Encode the marquee as a looping GIF

    Raises:
        EmptyAnimationError: nothing is lit
        PaletteOverflowError: more than 255 distinct pixel colors
        ImageSizeError: grid * cell_scale exceeds the GIF size fields
    """
    if cell_scale < 1:
        raise ValueError(f"Cell scale must be >= 1 (got {cell_scale})")

    snapshot = animation.snapshot()
    grid = snapshot.grid
    strips = scroll_strips(snapshot)
    palette = strip_palette(strips)
    log.debug("Rendered scroll cycle", ticks=len(strips), colors=len(palette), scale=cell_scale)

    return GifEncoder().encode(
        grid.width * cell_scale,
        grid.height * cell_scale,
        _rasterize_all(strips, grid, cell_scale, snapshot.step_delay_ms),
        palette=palette
    )
