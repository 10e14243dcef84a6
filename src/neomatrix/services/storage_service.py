"""
Storage service - Autosave persistence of the editor document

Reads the autosave blob once at startup and writes it on an interval and on
shutdown. Storage failures are logged, never raised.
"""

import asyncio
from pathlib import Path
from typing import Optional

from neomatrix.models.config import EditorConfig
from neomatrix.models.domain import Animation
from neomatrix.models.errors import DomainError
from neomatrix.services.editor_service import default_animation
from neomatrix.utils.logger import get_logger, LogCategory
from neomatrix.utils.serialization import Serializer

log = get_logger().for_category(LogCategory.STORAGE)


class StorageService:
    """
    Autosave file access

    Example:
        storage = StorageService(config.autosave_path, config)
        editor = EditorService(storage.load(), config)
        task = asyncio.create_task(storage.autosave_loop(editor, 30.0))
    """

    def __init__(self, path: Path, config: Optional[EditorConfig] = None):
        self.path = Path(path)
        self.config = config or EditorConfig()
        self._saved_revision: Optional[int] = None

    def load(self) -> Animation:
        """
        Read the autosave blob

        Returns:
            Restored Animation, or a fresh default one when absent or unreadable
        """
        if not self.path.exists():
            log.info(f"No autosave at {self.path}, starting fresh")
            return default_animation(self.config)

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
            animation = Serializer.animation_from_json(text, defaults=self.config)
        except (OSError, ValueError, DomainError) as ex:
            log.warn(f"Autosave unreadable, starting fresh: {ex}", path=str(self.path))
            return default_animation(self.config)

        log.info(
            f"Restored autosave {self.path}",
            frames=animation.frame_count,
            pixels=animation.pixel_count
        )
        return animation

    def save(self, animation: Animation) -> bool:
        """Write the autosave blob. Returns False (logged) on failure."""
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(Serializer.animation_to_json(animation, include_state=True))
            tmp_path.replace(self.path)
        except OSError as ex:
            log.error(f"Failed to save autosave: {ex}", path=str(self.path))
            return False

        log.debug(f"Autosaved {self.path}")
        return True

    def save_if_changed(self, editor) -> bool:
        """Save only when the editor revision moved since the last write"""
        if editor.revision == self._saved_revision:
            return False
        if self.save(editor.animation):
            self._saved_revision = editor.revision
            return True
        return False

    async def autosave_loop(self, editor, interval_s: float) -> None:
        """Periodic autosave until cancelled"""
        log.info("Autosave loop started", interval_s=interval_s)
        try:
            while True:
                await asyncio.sleep(interval_s)
                self.save_if_changed(editor)
        except asyncio.CancelledError:
            log.debug("Autosave loop cancelled")
            raise
