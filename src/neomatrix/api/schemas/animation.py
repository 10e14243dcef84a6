"""
Animation schemas - Pydantic models for editor requests/responses
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

from neomatrix.engine.coordinate_mapper import CoordinateMapper
from neomatrix.engine.marquee import MegaFrame
from neomatrix.models.domain import Frame, Pixel
from neomatrix.services.editor_service import EditorService


# ============================================================================
# REQUESTS
# ============================================================================

class GridSizeRequest(BaseModel):
    """Request to resize the grid (clears every frame)"""
    width: int = Field(description="Columns, 1-64")
    height: int = Field(description="Rows, 1-64")

    model_config = ConfigDict(json_schema_extra={"example": {"width": 16, "height": 8}})


class OrientationRequest(BaseModel):
    """Request to change the wiring origin corner (clears every frame)"""
    orientation: Literal["top-left", "top-right", "bottom-left", "bottom-right"]


class DrawColorRequest(BaseModel):
    """Request to change the active draw color"""
    color: str = Field(description="Hex color, e.g. '#00ff00'")


class StepDelayRequest(BaseModel):
    """Request to change the scroll step delay"""
    step_delay_ms: int = Field(description="Milliseconds per scroll tick (>= 50)")


class FrameReorderRequest(BaseModel):
    """Request to move a frame"""
    from_index: int
    to_index: int


class FrameRenameRequest(BaseModel):
    """Request to rename a frame (blank resets to the default name)"""
    name: str


class PlaybackStartRequest(BaseModel):
    """Request to start the scroll preview"""
    delay_ms: Optional[int] = Field(None, ge=1, description="Override the animation step delay")


# ============================================================================
# RESPONSES
# ============================================================================

class PixelResponse(BaseModel):
    row: int
    col: int
    color: str

    @classmethod
    def from_pixel(cls, pixel: Pixel) -> "PixelResponse":
        return cls(row=pixel.row, col=pixel.col, color=pixel.color.to_hex())


class FrameResponse(BaseModel):
    index: int
    name: str
    pixel_count: int
    coords: List[PixelResponse]

    @classmethod
    def from_frame(cls, index: int, frame: Frame) -> "FrameResponse":
        return cls(
            index=index,
            name=frame.name,
            pixel_count=len(frame.coords),
            coords=[PixelResponse.from_pixel(p) for p in frame.coords]
        )


class AnimationStateResponse(BaseModel):
    """Complete editor state"""
    grid_width: int
    grid_height: int
    orientation: str
    origin_index: Optional[int] = Field(description="LED index of logical cell (0, 0)")
    draw_color: str
    step_delay_ms: int
    current_index: int
    frame_count: int
    can_undo: bool
    can_redo: bool
    frames: List[FrameResponse]

    @classmethod
    def from_editor(cls, editor: EditorService) -> "AnimationStateResponse":
        animation = editor.animation
        grid = animation.grid
        return cls(
            grid_width=grid.width,
            grid_height=grid.height,
            orientation=grid.orientation.value,
            origin_index=CoordinateMapper(grid).origin_index(),
            draw_color=animation.draw_color.to_hex(),
            step_delay_ms=animation.step_delay_ms,
            current_index=animation.current_index,
            frame_count=animation.frame_count,
            can_undo=editor.history.can_undo,
            can_redo=editor.history.can_redo,
            frames=[FrameResponse.from_frame(i, f) for i, f in enumerate(animation.frames)]
        )


class ToggleResponse(BaseModel):
    """Result of a cell toggle"""
    row: int
    col: int
    lit: bool
    color: Optional[str] = None


class HistoryResponse(BaseModel):
    """Result of undo / redo"""
    applied: bool
    can_undo: bool
    can_redo: bool


class MegaFrameResponse(BaseModel):
    """All non-empty frames laid out side by side"""
    min_col: int
    max_col: int
    width: int
    pixels: List[PixelResponse]

    @classmethod
    def from_mega(cls, mega: MegaFrame) -> "MegaFrameResponse":
        return cls(
            min_col=mega.min_col,
            max_col=mega.max_col,
            width=mega.width,
            pixels=[PixelResponse(row=p.row, col=p.col, color=p.color.to_hex()) for p in mega.pixels]
        )


class PlaybackStateResponse(BaseModel):
    """Scroll preview state"""
    running: bool
    delay_ms: int
    tick_count: int
    strip: Optional[List[Optional[str]]] = Field(
        None,
        description="Last rendered LED strip (hex per LED, null = off)"
    )
