"""
Export / Import Endpoints - downloadable artifacts and JSON import
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from neomatrix.api.dependencies import get_service_container
from neomatrix.api.schemas.animation import AnimationStateResponse
from neomatrix.models.enums import ExportFormat
from neomatrix.models.errors import ImportFormatError
from neomatrix.services.service_container import ServiceContainer
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["Export"])


@router.get(
    "/exports/{fmt}",
    summary="Download export",
    description="json -> frames.json, csv -> frames.csv, rust -> nm_scroll_frames.rs, gif -> animation.gif",
    response_class=Response
)
async def export_animation(
    fmt: ExportFormat,
    services: ServiceContainer = Depends(get_service_container)
) -> Response:
    artifact = await services.export_service.export_async(services.editor_service.animation, fmt)
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'}
    )


@router.post(
    "/imports/json",
    response_model=AnimationStateResponse,
    summary="Import JSON",
    description="Replaces the document. Malformed documents are rejected without changing anything."
)
async def import_animation(
    request: Request,
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationStateResponse:
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise ImportFormatError("Document is not UTF-8 text")

    services.editor_service.import_json(text)
    return AnimationStateResponse.from_editor(services.editor_service)
