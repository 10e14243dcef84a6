"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass

from neomatrix.engine.scroll_player import ScrollPlayer
from neomatrix.managers.config_manager import ConfigManager
from neomatrix.services.editor_service import EditorService
from neomatrix.services.export_service import ExportService
from neomatrix.services.storage_service import StorageService


@dataclass
class ServiceContainer:
    """
    Centralized dependency injection container for the editor core.

    Services included:
    - editor_service: Animation document, atomic edits, undo/redo
    - export_service: JSON / CSV / Rust / GIF artifacts
    - storage_service: Autosave persistence
    - scroll_player: Marquee preview ticker

    Usage:
        services = ServiceContainer(
            editor_service=editor,
            export_service=ExportService(config.gif_cell_scale),
            storage_service=storage,
            scroll_player=ScrollPlayer(),
            config_manager=config_manager
        )
        set_service_container(services)
    """

    editor_service: EditorService
    export_service: ExportService
    storage_service: StorageService
    scroll_player: ScrollPlayer
    config_manager: ConfigManager
