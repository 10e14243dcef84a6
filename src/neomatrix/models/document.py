"""
Animation document schema - Pydantic models for imported JSON

Validates the raw document shape before anything touches editor state.
Legacy documents (single gridSize, pixels without color, unnamed frames)
are accepted here; defaults are filled in by Serializer.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from neomatrix.models.color import Color
from neomatrix.models.domain.grid import MIN_GRID_SIZE, MAX_GRID_SIZE
from neomatrix.models.errors import InvalidColorError


def _check_color(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        Color.from_hex(value)
    except InvalidColorError:
        raise ValueError(f"invalid color '{value}' (expected #rrggbb)")
    return value


class PixelDocument(BaseModel):
    """One lit cell: {row, col, color?}"""
    model_config = ConfigDict(extra="ignore")

    row: int = Field(ge=0, description="Logical row")
    col: int = Field(ge=0, description="Logical column")
    color: Optional[str] = Field(None, description="#rrggbb (falls back to ledColor)")

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: Optional[str]) -> Optional[str]:
        return _check_color(value)


class FrameDocument(BaseModel):
    """{name?, coords}"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    coords: List[PixelDocument] = Field(default_factory=list)


class AnimationDocument(BaseModel):
    """
    Exported animation document

    Example:
        {
          "gridWidth": 8, "gridHeight": 8, "orientation": "top-left",
          "ledColor": "#ff0000", "animationSpeedMs": 200,
          "frames": [{"name": "Frame 1", "coords": [{"row": 0, "col": 0, "color": "#ff0000"}]}]
        }
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    grid_width: Optional[int] = Field(None, alias="gridWidth", ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE)
    grid_height: Optional[int] = Field(None, alias="gridHeight", ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE)
    orientation: Optional[str] = None
    led_color: Optional[str] = Field(None, alias="ledColor")
    animation_speed_ms: Optional[int] = Field(None, alias="animationSpeedMs")
    current_frame_index: Optional[int] = Field(None, alias="currentFrameIndex")
    frames: List[FrameDocument]

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("document must be a JSON object")

        frames = data.get("frames")
        if not isinstance(frames, list) or not frames:
            raise ValueError("frames must be a non-empty list")

        size = data.get("gridSize")
        if size is not None:
            data = dict(data)
            data.setdefault("gridWidth", size)
            data.setdefault("gridHeight", size)
        return data

    @field_validator("led_color")
    @classmethod
    def validate_led_color(cls, value: Optional[str]) -> Optional[str]:
        return _check_color(value)
