"""
Frame Endpoints - frame list management and cell toggling
"""

from fastapi import APIRouter, Depends, status

from neomatrix.api.dependencies import get_editor
from neomatrix.api.schemas.animation import (
    AnimationStateResponse, FrameRenameRequest, FrameReorderRequest, ToggleResponse
)
from neomatrix.engine.coordinate_mapper import CoordinateMapper
from neomatrix.models.errors import CellIndexError
from neomatrix.services.editor_service import EditorService
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(
    prefix="/frames",
    tags=["Frames"],
)


@router.post(
    "",
    response_model=AnimationStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add frame",
    description="Appends an empty frame and selects it"
)
async def add_frame(editor: EditorService = Depends(get_editor)) -> AnimationStateResponse:
    editor.add_frame()
    return AnimationStateResponse.from_editor(editor)


@router.post(
    "/reorder",
    response_model=AnimationStateResponse,
    summary="Move frame"
)
async def reorder_frame(
    request: FrameReorderRequest,
    editor: EditorService = Depends(get_editor)
) -> AnimationStateResponse:
    editor.reorder_frame(request.from_index, request.to_index)
    return AnimationStateResponse.from_editor(editor)


@router.put(
    "/{index}/select",
    response_model=AnimationStateResponse,
    summary="Select frame"
)
async def select_frame(index: int, editor: EditorService = Depends(get_editor)) -> AnimationStateResponse:
    editor.select_frame(index)
    return AnimationStateResponse.from_editor(editor)


@router.put(
    "/{index}/name",
    response_model=AnimationStateResponse,
    summary="Rename frame"
)
async def rename_frame(
    index: int,
    request: FrameRenameRequest,
    editor: EditorService = Depends(get_editor)
) -> AnimationStateResponse:
    editor.rename_frame(index, request.name)
    return AnimationStateResponse.from_editor(editor)


@router.post(
    "/{index}/duplicate",
    response_model=AnimationStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate frame",
    description="Inserts a copy right after the frame and selects it"
)
async def duplicate_frame(index: int, editor: EditorService = Depends(get_editor)) -> AnimationStateResponse:
    editor.duplicate_frame(index)
    return AnimationStateResponse.from_editor(editor)


@router.post(
    "/{index}/clear",
    response_model=AnimationStateResponse,
    summary="Clear frame"
)
async def clear_frame(index: int, editor: EditorService = Depends(get_editor)) -> AnimationStateResponse:
    editor.clear_frame(index)
    return AnimationStateResponse.from_editor(editor)


@router.delete(
    "/{index}",
    response_model=AnimationStateResponse,
    summary="Delete frame",
    description="The last remaining frame cannot be deleted (409)"
)
async def delete_frame(index: int, editor: EditorService = Depends(get_editor)) -> AnimationStateResponse:
    editor.delete_frame(index)
    return AnimationStateResponse.from_editor(editor)


@router.post(
    "/{index}/cells/{cell}/toggle",
    response_model=ToggleResponse,
    summary="Toggle cell",
    description="Cell is an LED index, mapped to (row, col) through the grid orientation"
)
async def toggle_cell(index: int, cell: int, editor: EditorService = Depends(get_editor)) -> ToggleResponse:
    mapper = CoordinateMapper(editor.animation.grid)
    if not 0 <= cell < mapper.cell_count:
        raise CellIndexError(cell, mapper.cell_count)

    row, col = mapper.to_row_col(cell)
    pixel = editor.toggle_pixel(row, col, index)
    return ToggleResponse(
        row=row,
        col=col,
        lit=pixel is not None,
        color=pixel.color.to_hex() if pixel is not None else None
    )
