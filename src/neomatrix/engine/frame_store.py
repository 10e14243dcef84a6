"""
Frame Store

Pure data operations on an Animation: pixel toggling, frame list management
and global settings. No history, no notifications - EditorService wraps
these with snapshot/commit semantics.

Every operation validates before it mutates, so a raised DomainError leaves
the animation untouched.
"""

from typing import Optional

from neomatrix.models.color import Color
from neomatrix.models.domain import (
    Animation, Frame, GridConfig, Pixel, default_frame_name, MIN_STEP_DELAY_MS
)
from neomatrix.models.domain.grid import MIN_GRID_SIZE, MAX_GRID_SIZE
from neomatrix.models.enums import Orientation
from neomatrix.models.errors import (
    FrameIndexError, GridSizeError, LastFrameError, StepDelayError
)
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EDITOR)


class FrameStore:
    """
    Mutating operations over one Animation

    Example:
        store = FrameStore(animation)
        store.toggle_pixel(2, 3)        # current frame, active draw color
        store.add_frame()
        store.reorder_frame(1, 0)
    """

    def __init__(self, animation: Animation):
        self.animation = animation

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        count = len(self.animation.frames)
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < count:
            raise FrameIndexError(index, count)

    def _frame(self, index: Optional[int]) -> Frame:
        if index is None:
            return self.animation.current_frame
        self._check_index(index)
        return self.animation.frames[index]

    def _clear_all_pixels(self) -> None:
        for frame in self.animation.frames:
            frame.coords = []
        self.animation.current_index = 0

    # ------------------------------------------------------------
    # Pixels
    # ------------------------------------------------------------

    def toggle_pixel(self, row: int, col: int, frame_index: Optional[int] = None) -> Optional[Pixel]:
        """
        Three-way toggle with the active draw color

            absent                      -> lit with draw color
            lit with draw color         -> removed
            lit with another color      -> recolored to draw color

        Returns:
            The pixel now at (row, col), or None when it was removed
        """
        frame = self._frame(frame_index)
        color = self.animation.draw_color
        existing = frame.find(row, col)

        if existing is None:
            pixel = Pixel(row=row, col=col, color=color)
            frame.coords.append(pixel)
            log.debug("Pixel lit", frame=frame.name, cell=f"({row}, {col})", color=color.to_hex())
            return pixel

        current = frame.coords[existing]
        if current.color == color:
            del frame.coords[existing]
            log.debug("Pixel cleared", frame=frame.name, cell=f"({row}, {col})")
            return None

        # Recolor in place, insertion order is kept
        pixel = Pixel(row=row, col=col, color=color)
        frame.coords[existing] = pixel
        log.debug("Pixel recolored", frame=frame.name, cell=f"({row}, {col})",
                  color=f"{current.color.to_hex()} → {color.to_hex()}")
        return pixel

    def clear_frame(self, frame_index: Optional[int] = None) -> bool:
        """Remove every pixel of a frame. Returns False when it was already empty."""
        frame = self._frame(frame_index)
        if frame.is_empty:
            return False
        frame.coords = []
        log.info(f"Cleared {frame.name}")
        return True

    # ------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------

    def add_frame(self) -> int:
        """Append an empty frame and select it. Returns its index."""
        frames = self.animation.frames
        frames.append(Frame(name=default_frame_name(len(frames))))
        self.animation.current_index = len(frames) - 1
        log.info(f"Created {frames[-1].name}", frame_count=len(frames))
        return self.animation.current_index

    def duplicate_frame(self, index: int) -> int:
        """Insert a copy right after `index` and select it. Returns the copy's index."""
        self._check_index(index)
        source = self.animation.frames[index]
        copy = source.copy(name=f"{source.name} copy")
        self.animation.frames.insert(index + 1, copy)
        self.animation.current_index = index + 1
        log.info(f"Duplicated {source.name}", pixels=len(copy.coords))
        return index + 1

    def delete_frame(self, index: int) -> None:
        """
        Remove a frame

        Raises:
            LastFrameError: it is the only frame left
        """
        self._check_index(index)
        frames = self.animation.frames
        if len(frames) == 1:
            raise LastFrameError()

        removed = frames.pop(index)
        current = self.animation.current_index
        if current > index or current >= len(frames):
            current -= 1
        self.animation.current_index = max(0, min(current, len(frames) - 1))
        log.info(f"Deleted {removed.name}", frame_count=len(frames))

    def reorder_frame(self, from_index: int, to_index: int) -> None:
        """Move a frame; the selection follows whichever frame was selected"""
        self._check_index(from_index)
        self._check_index(to_index)
        if from_index == to_index:
            return

        frames = self.animation.frames
        selected = frames[self.animation.current_index]
        frame = frames.pop(from_index)
        frames.insert(to_index, frame)
        self.animation.current_index = next(i for i, f in enumerate(frames) if f is selected)
        log.info(f"Moved {frame.name}", from_index=from_index, to_index=to_index)

    def select_frame(self, index: int) -> None:
        self._check_index(index)
        self.animation.current_index = index

    def previous_frame(self) -> bool:
        if self.animation.current_index == 0:
            return False
        self.animation.current_index -= 1
        return True

    def next_frame(self) -> bool:
        if self.animation.current_index >= len(self.animation.frames) - 1:
            return False
        self.animation.current_index += 1
        return True

    def rename_frame(self, index: int, name: str) -> None:
        self._check_index(index)
        name = (name or "").strip()
        self.animation.frames[index].name = name or default_frame_name(index)

    # ------------------------------------------------------------
    # Global settings
    # ------------------------------------------------------------

    def set_draw_color(self, color: Color) -> None:
        self.animation.draw_color = Color.parse(color)

    def set_step_delay(self, delay_ms: int) -> None:
        if not isinstance(delay_ms, int) or isinstance(delay_ms, bool) or delay_ms < MIN_STEP_DELAY_MS:
            raise StepDelayError(delay_ms, MIN_STEP_DELAY_MS)
        self.animation.step_delay_ms = delay_ms

    def resize_grid(self, width: int, height: int) -> bool:
        """
        Change grid dimensions.

        Out-of-range sizes raise GridSizeError and change nothing. A real
        resize clears all pixels and selects frame 0; the same size is a no-op.

        Returns:
            True when the grid changed
        """
        if not GridConfig.is_valid_size(width, height):
            raise GridSizeError(width, height, MIN_GRID_SIZE, MAX_GRID_SIZE)

        grid = self.animation.grid
        if (width, height) == (grid.width, grid.height):
            return False

        self.animation.grid = GridConfig(width=width, height=height, orientation=grid.orientation)
        self._clear_all_pixels()
        log.info(f"Grid resized to {width}x{height}")
        return True

    def set_orientation(self, orientation: Orientation) -> bool:
        """Change wiring orientation (clears all pixels). Returns True when it changed."""
        orientation = Orientation.parse(orientation)
        grid = self.animation.grid
        if orientation == grid.orientation:
            return False

        self.animation.grid = GridConfig(width=grid.width, height=grid.height, orientation=orientation)
        self._clear_all_pixels()
        log.info(f"Origin set to {orientation.value.replace('-', ' ')}")
        return True
