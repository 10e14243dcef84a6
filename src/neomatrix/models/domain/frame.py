"""Frame domain models"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from neomatrix.models.color import Color


@dataclass(frozen=True)
class Pixel:
    """One lit cell of a frame"""
    row: int
    col: int
    color: Color

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.row, self.col)


@dataclass
class Frame:
    """
    Named set of lit cells.

    coords keeps insertion order (used for stable export / code generation)
    and holds at most one Pixel per (row, col).
    """
    name: str
    coords: List[Pixel] = field(default_factory=list)

    def find(self, row: int, col: int) -> Optional[int]:
        """Position of the pixel at (row, col) in coords, or None"""
        for i, pixel in enumerate(self.coords):
            if pixel.row == row and pixel.col == col:
                return i
        return None

    @property
    def is_empty(self) -> bool:
        return not self.coords

    def column_bounds(self) -> Optional[Tuple[int, int]]:
        """(min_col, max_col) over lit pixels, None for an empty frame"""
        if not self.coords:
            return None
        cols = [pixel.col for pixel in self.coords]
        return min(cols), max(cols)

    def copy(self, name: Optional[str] = None) -> "Frame":
        # Pixels are frozen, a new list is a deep enough copy
        return Frame(name=self.name if name is None else name, coords=list(self.coords))
