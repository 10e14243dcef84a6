"""Services layer"""

from .editor_service import EditorService, default_animation
from .export_service import ExportService, ExportArtifact
from .storage_service import StorageService
from .service_container import ServiceContainer

__all__ = [
    "EditorService",
    "default_animation",
    "ExportService",
    "ExportArtifact",
    "StorageService",
    "ServiceContainer",
]
