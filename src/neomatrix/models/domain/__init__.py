"""Domain models - Grid, frames and the animation document"""

from neomatrix.models.domain.grid import GridConfig, MIN_GRID_SIZE, MAX_GRID_SIZE
from neomatrix.models.domain.frame import Pixel, Frame
from neomatrix.models.domain.animation import (
    Animation, default_frame_name, MIN_STEP_DELAY_MS, DEFAULT_STEP_DELAY_MS
)

__all__ = [
    "GridConfig",
    "MIN_GRID_SIZE",
    "MAX_GRID_SIZE",
    "Pixel",
    "Frame",
    "Animation",
    "default_frame_name",
    "MIN_STEP_DELAY_MS",
    "DEFAULT_STEP_DELAY_MS",
]
