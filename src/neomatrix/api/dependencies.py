"""
Service access for route handlers

main_asyncio.py (or a test fixture) builds the ServiceContainer and hands it
over with set_service_container(); routes pull it in through Depends:

    @router.get("/animation")
    async def get_animation(editor: EditorService = Depends(get_editor)):
        ...
"""

from typing import Optional

from fastapi import Depends, HTTPException, status

from neomatrix.services.editor_service import EditorService
from neomatrix.services.service_container import ServiceContainer

_services: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """Attach the running services (None detaches them on shutdown)"""
    global _services
    _services = services


async def get_service_container() -> ServiceContainer:
    """503 until the editor has finished starting"""
    if _services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Editor services are not available yet"
        )
    return _services


async def get_editor(services: ServiceContainer = Depends(get_service_container)) -> EditorService:
    return services.editor_service
