"""
Marquee layout

Concatenates every non-empty frame into one horizontal mega-frame and scrolls
it right-to-left across the grid, one column per tick.

Layout rules:
    - empty frames are skipped (no width, no gap)
    - a frame spanning columns [min, max] occupies max - min + 2 columns
      (its own width plus one blank gap column)
    - pixels are shifted so the frame's first lit column lands on current_x

Scroll rules:
    - initial offset = W - mega.min_col (content starts just off the right edge)
    - a pixel is visible iff 0 <= col + offset < W
    - after rendering, offset resets once offset + mega.max_col < 0,
      otherwise it decrements by one
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from neomatrix.engine.coordinate_mapper import CoordinateMapper
from neomatrix.models.color import Color
from neomatrix.models.domain import Frame, GridConfig
from neomatrix.models.errors import EmptyAnimationError
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.MARQUEE)

# LED strip contents: one entry per LED, None = off
Strip = List[Optional[Color]]


@dataclass(frozen=True)
class MegaPixel:
    row: int
    col: int
    color: Color


@dataclass
class MegaFrame:
    """All non-empty frames laid out side by side"""
    pixels: List[MegaPixel] = field(default_factory=list)
    min_col: int = 0
    max_col: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.pixels

    @property
    def width(self) -> int:
        """Columns spanned by lit pixels"""
        if not self.pixels:
            return 0
        return self.max_col - self.min_col + 1


def build_mega_frame(frames: Iterable[Frame]) -> MegaFrame:
    """Lay out frames left to right, skipping empty ones"""
    pixels: List[MegaPixel] = []
    current_x = 0

    for frame in frames:
        bounds = frame.column_bounds()
        if bounds is None:
            continue

        min_c, max_c = bounds
        for pixel in frame.coords:
            pixels.append(MegaPixel(row=pixel.row, col=pixel.col - min_c + current_x, color=pixel.color))
        current_x += max_c - min_c + 2

    if not pixels:
        return MegaFrame()

    cols = [p.col for p in pixels]
    return MegaFrame(pixels=pixels, min_col=min(cols), max_col=max(cols))


class MarqueeScroller:
    """
    Stateful scroll window over a MegaFrame

    Example:
        scroller = MarqueeScroller(build_mega_frame(animation.frames), animation.grid)
        strip = scroller.tick()      # first frame, content enters from the right
    """

    def __init__(self, mega: MegaFrame, grid: GridConfig):
        self.mega = mega
        self.grid = grid
        self.mapper = CoordinateMapper(grid)
        self.offset = self.initial_offset

    @classmethod
    def from_frames(cls, frames: Sequence[Frame], grid: GridConfig) -> "MarqueeScroller":
        mega = build_mega_frame(frames)
        if mega.is_empty:
            raise EmptyAnimationError("scroll")
        log.debug("Mega-frame built", pixels=len(mega.pixels), columns=f"{mega.min_col}..{mega.max_col}")
        return cls(mega, grid)

    @property
    def initial_offset(self) -> int:
        return self.grid.width - self.mega.min_col

    @property
    def cycle_length(self) -> int:
        """Ticks in one full pass (initial offset through the reset)"""
        return (self.mega.max_col - self.mega.min_col) + self.grid.width + 1

    def cycle_offsets(self) -> Iterator[int]:
        """Offsets of one seamless loop: initial, initial - 1, ..."""
        start = self.initial_offset
        for step in range(self.cycle_length):
            yield start - step

    def render(self, offset: int) -> Strip:
        """LED strip for a given offset; pixels mapping outside the strip are dropped"""
        width = self.grid.width
        strip: Strip = [None] * self.mapper.cell_count

        for pixel in self.mega.pixels:
            col = pixel.col + offset
            if not 0 <= col < width:
                continue
            index = self.mapper.to_index_checked(pixel.row, col)
            if index is not None:
                strip[index] = pixel.color

        return strip

    def tick(self) -> Strip:
        """Render the current offset, then advance (or wrap)"""
        strip = self.render(self.offset)
        if self.offset + self.mega.max_col < 0:
            self.offset = self.initial_offset
        else:
            self.offset -= 1
        return strip
