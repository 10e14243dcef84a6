# engine/coordinate_mapper.py
"""
CoordinateMapper
================
Maps linear LED index <-> logical (row, col) for the four wiring orientations.

    top-left      row = i // W            col = i % W
    top-right     row = (W-1) - (i % W)   col = i // W
    bottom-left   row = i % W             col = (H-1) - (i // W)
    bottom-right  row = (H-1) - (i // W)  col = (W-1) - (i % W)

top-right and bottom-left mix W and H; on non-square grids their row/col
ranges follow W and H crosswise. Saved animations, generated firmware and
GIF export all depend on these exact formulas, so they are kept as-is.
Unknown orientations behave as top-left.
"""

from __future__ import annotations
from typing import Optional, Tuple

from neomatrix.models.domain.grid import GridConfig
from neomatrix.models.enums import Orientation


def _orientation_or_default(orientation) -> Orientation:
    return Orientation.parse(orientation, default=Orientation.TOP_LEFT)


def index_to_row_col(index: int, width: int, height: int, orientation) -> Tuple[int, int]:
    """Linear LED index -> logical (row, col)"""
    orientation = _orientation_or_default(orientation)
    line, pos = divmod(index, width)

    if orientation == Orientation.TOP_RIGHT:
        return (width - 1) - pos, line
    if orientation == Orientation.BOTTOM_LEFT:
        return pos, (height - 1) - line
    if orientation == Orientation.BOTTOM_RIGHT:
        return (height - 1) - line, (width - 1) - pos
    return line, pos


def row_col_to_index(row: int, col: int, width: int, height: int, orientation) -> int:
    """Logical (row, col) -> linear LED index (exact inverse of index_to_row_col)"""
    orientation = _orientation_or_default(orientation)

    if orientation == Orientation.TOP_RIGHT:
        return col * width + (width - 1 - row)
    if orientation == Orientation.BOTTOM_LEFT:
        return (height - 1 - col) * width + row
    if orientation == Orientation.BOTTOM_RIGHT:
        return (height - 1 - row) * width + (width - 1 - col)
    return row * width + col


class CoordinateMapper:
    """
    Index <-> cell mapper bound to one grid.

    Usage:
        mapper = CoordinateMapper(animation.grid)
        row, col = mapper.to_row_col(9)
        index = mapper.to_index(row, col)
    """

    def __init__(self, grid: GridConfig) -> None:
        self.grid = grid

    @property
    def cell_count(self) -> int:
        return self.grid.cell_count

    def to_row_col(self, index: int) -> Tuple[int, int]:
        return index_to_row_col(index, self.grid.width, self.grid.height, self.grid.orientation)

    def to_index(self, row: int, col: int) -> int:
        return row_col_to_index(row, col, self.grid.width, self.grid.height, self.grid.orientation)

    def to_index_checked(self, row: int, col: int) -> Optional[int]:
        """Index for (row, col), or None when it lands outside the strip"""
        index = self.to_index(row, col)
        if 0 <= index < self.cell_count:
            return index
        return None

    def origin_index(self) -> Optional[int]:
        """Strip index whose logical cell is (0, 0) (the origin corner marker)"""
        for index in range(self.cell_count):
            if self.to_row_col(index) == (0, 0):
                return index
        return None
