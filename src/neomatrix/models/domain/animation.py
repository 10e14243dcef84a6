"""
Animation domain model

The Animation is the single mutable root of editor state. Everything else
(mega-frame, generated code, GIF bytes) is derived from a snapshot of it.
"""

from dataclasses import dataclass, field, replace
from typing import List

from neomatrix.models.color import Color
from neomatrix.models.domain.frame import Frame
from neomatrix.models.domain.grid import GridConfig

MIN_STEP_DELAY_MS = 50
DEFAULT_STEP_DELAY_MS = 200


def default_frame_name(index: int) -> str:
    """Name for the frame at 0-based position `index`"""
    return f"Frame {index + 1}"


@dataclass
class Animation:
    """
    Editor document: ordered frames plus global settings

    Attributes:
        grid: Matrix geometry and orientation
        frames: Ordered frames (never empty)
        current_index: Selected frame
        draw_color: Color applied when lighting a cell
        step_delay_ms: Scroll tick interval (>= 50)
    """
    grid: GridConfig = field(default_factory=GridConfig)
    frames: List[Frame] = field(default_factory=lambda: [Frame(name=default_frame_name(0))])
    current_index: int = 0
    draw_color: Color = field(default_factory=Color.red)
    step_delay_ms: int = DEFAULT_STEP_DELAY_MS

    @property
    def current_frame(self) -> Frame:
        return self.frames[self.current_index]

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def pixel_count(self) -> int:
        return sum(len(frame.coords) for frame in self.frames)

    def snapshot(self) -> "Animation":
        """Independent copy (frames and their coord lists are copied)"""
        return replace(self, frames=[frame.copy() for frame in self.frames])
