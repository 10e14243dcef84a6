"""Grid domain model"""

from dataclasses import dataclass

from neomatrix.models.enums import Orientation
from neomatrix.models.errors import GridSizeError

MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 64


@dataclass(frozen=True)
class GridConfig:
    """
    Immutable LED matrix geometry

    Raises GridSizeError when width/height fall outside 1..64.
    """
    width: int = 8
    height: int = 8
    orientation: Orientation = Orientation.TOP_LEFT

    def __post_init__(self):
        if not self.is_valid_size(self.width, self.height):
            raise GridSizeError(self.width, self.height, MIN_GRID_SIZE, MAX_GRID_SIZE)

    @staticmethod
    def is_valid_size(width, height) -> bool:
        for value in (width, height):
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            if not MIN_GRID_SIZE <= value <= MAX_GRID_SIZE:
                return False
        return True

    @property
    def cell_count(self) -> int:
        return self.width * self.height
