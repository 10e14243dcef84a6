"""
Playback Endpoints - marquee layout and scroll preview control
"""

from typing import Optional

from fastapi import APIRouter, Depends

from neomatrix.api.dependencies import get_service_container
from neomatrix.api.schemas.animation import (
    MegaFrameResponse, PlaybackStartRequest, PlaybackStateResponse
)
from neomatrix.engine.scroll_player import ScrollPlayer
from neomatrix.services.service_container import ServiceContainer

router = APIRouter(
    prefix="/playback",
    tags=["Playback"],
)


def _state(player: ScrollPlayer) -> PlaybackStateResponse:
    strip = None
    if player.last_strip is not None:
        strip = [color.to_hex() if color is not None else None for color in player.last_strip]
    return PlaybackStateResponse(
        running=player.is_running,
        delay_ms=player.delay_ms,
        tick_count=player.tick_count,
        strip=strip
    )


@router.get("/mega-frame", response_model=MegaFrameResponse, summary="Get mega-frame layout")
async def get_mega_frame(services: ServiceContainer = Depends(get_service_container)) -> MegaFrameResponse:
    return MegaFrameResponse.from_mega(services.editor_service.mega_frame())


@router.post(
    "/start",
    response_model=PlaybackStateResponse,
    summary="Start scroll preview",
    description="No-op when already running. 409 when no frame has lit pixels."
)
async def start_playback(
    request: Optional[PlaybackStartRequest] = None,
    services: ServiceContainer = Depends(get_service_container)
) -> PlaybackStateResponse:
    delay_ms = request.delay_ms if request is not None else None
    await services.scroll_player.start(services.editor_service.animation, delay_ms)
    return _state(services.scroll_player)


@router.post("/stop", response_model=PlaybackStateResponse, summary="Stop scroll preview")
async def stop_playback(services: ServiceContainer = Depends(get_service_container)) -> PlaybackStateResponse:
    await services.scroll_player.stop()
    return _state(services.scroll_player)


@router.get("/state", response_model=PlaybackStateResponse, summary="Get scroll preview state")
async def get_playback_state(services: ServiceContainer = Depends(get_service_container)) -> PlaybackStateResponse:
    return _state(services.scroll_player)
