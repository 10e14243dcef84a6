"""
Animation Endpoints - document state and global settings

Grid resize and orientation changes clear every frame.
"""

from fastapi import APIRouter, Depends

from neomatrix.api.dependencies import get_editor
from neomatrix.api.schemas.animation import (
    AnimationStateResponse, DrawColorRequest, GridSizeRequest,
    OrientationRequest, StepDelayRequest
)
from neomatrix.services.editor_service import EditorService
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(
    prefix="/animation",
    tags=["Animation"],
)


@router.get(
    "",
    response_model=AnimationStateResponse,
    summary="Get editor state",
    description="Grid, settings, selection and every frame's pixels"
)
async def get_animation(editor: EditorService = Depends(get_editor)) -> AnimationStateResponse:
    return AnimationStateResponse.from_editor(editor)


@router.put(
    "/grid",
    response_model=AnimationStateResponse,
    summary="Resize grid",
    description="Sizes outside 1-64 are rejected. A new size clears all pixels and selects frame 1."
)
async def set_grid_size(
    request: GridSizeRequest,
    editor: EditorService = Depends(get_editor)
) -> AnimationStateResponse:
    editor.resize_grid(request.width, request.height)
    return AnimationStateResponse.from_editor(editor)


@router.put(
    "/orientation",
    response_model=AnimationStateResponse,
    summary="Set origin corner",
    description="Changes the LED index mapping and clears all pixels"
)
async def set_orientation(
    request: OrientationRequest,
    editor: EditorService = Depends(get_editor)
) -> AnimationStateResponse:
    editor.set_orientation(request.orientation)
    return AnimationStateResponse.from_editor(editor)


@router.put(
    "/color",
    response_model=AnimationStateResponse,
    summary="Set draw color"
)
async def set_draw_color(
    request: DrawColorRequest,
    editor: EditorService = Depends(get_editor)
) -> AnimationStateResponse:
    editor.set_draw_color(request.color)
    return AnimationStateResponse.from_editor(editor)


@router.put(
    "/speed",
    response_model=AnimationStateResponse,
    summary="Set scroll step delay",
    description="Milliseconds per scroll tick, at least 50"
)
async def set_step_delay(
    request: StepDelayRequest,
    editor: EditorService = Depends(get_editor)
) -> AnimationStateResponse:
    editor.set_step_delay(request.step_delay_ms)
    return AnimationStateResponse.from_editor(editor)
