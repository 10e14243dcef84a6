"""
History Endpoints - undo / redo
"""

from fastapi import APIRouter, Depends

from neomatrix.api.dependencies import get_editor
from neomatrix.api.schemas.animation import HistoryResponse
from neomatrix.services.editor_service import EditorService

router = APIRouter(
    prefix="/history",
    tags=["History"],
)


def _response(editor: EditorService, applied: bool) -> HistoryResponse:
    return HistoryResponse(
        applied=applied,
        can_undo=editor.history.can_undo,
        can_redo=editor.history.can_redo
    )


@router.post("/undo", response_model=HistoryResponse, summary="Undo last edit")
async def undo(editor: EditorService = Depends(get_editor)) -> HistoryResponse:
    return _response(editor, editor.undo())


@router.post("/redo", response_model=HistoryResponse, summary="Redo last undone edit")
async def redo(editor: EditorService = Depends(get_editor)) -> HistoryResponse:
    return _response(editor, editor.redo())
