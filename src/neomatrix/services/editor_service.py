"""Editor service - Atomic animation mutations with undo/redo and change notification"""

from typing import Any, Callable, List, Optional

from neomatrix.engine.frame_store import FrameStore
from neomatrix.engine.history import AnimationHistory, DEFAULT_HISTORY_LIMIT
from neomatrix.engine.marquee import MegaFrame, build_mega_frame
from neomatrix.models.color import Color
from neomatrix.models.config import EditorConfig
from neomatrix.models.domain import Animation, Frame, GridConfig, default_frame_name
from neomatrix.models.enums import EditorChange, Orientation
from neomatrix.utils.logger import get_logger, LogCategory
from neomatrix.utils.serialization import Serializer

log = get_logger().for_category(LogCategory.EDITOR)

ChangeListener = Callable[[EditorChange, Animation], None]


def default_animation(config: Optional[EditorConfig] = None) -> Animation:
    """Fresh document with one empty frame, using configured defaults"""
    config = config or EditorConfig()
    return Animation(
        grid=GridConfig(width=config.grid_width, height=config.grid_height, orientation=config.orientation),
        frames=[Frame(name=default_frame_name(0))],
        current_index=0,
        draw_color=config.led_color,
        step_delay_ms=config.step_delay_ms,
    )


class EditorService:
    """
    Owns the Animation and applies every edit atomically.

    Each mutation runs on a snapshot through FrameStore; only when it
    succeeds is the snapshot committed, the previous state pushed to history
    and listeners notified. A raised DomainError leaves state untouched.

    Selection changes are committed without a history entry.

    Example:
        editor = EditorService(config=config)
        editor.subscribe(lambda change, animation: ...)
        editor.toggle_pixel(0, 0)
        editor.undo()
    """

    def __init__(
        self,
        animation: Optional[Animation] = None,
        config: Optional[EditorConfig] = None,
        history_limit: Optional[int] = None
    ):
        self.config = config or EditorConfig()
        self._animation = animation or default_animation(self.config)
        self.history = AnimationHistory(history_limit or self.config.history_limit or DEFAULT_HISTORY_LIMIT)
        self._listeners: List[ChangeListener] = []
        self.revision = 0

    @property
    def animation(self) -> Animation:
        return self._animation

    # === Listeners ===

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: EditorChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change, self._animation)
            except Exception as ex:
                log.error(
                    f"Change listener failed: {type(ex).__name__}: {ex}",
                    change=change.name,
                    listener=getattr(listener, "__name__", repr(listener))
                )

    # === Commit ===

    def _apply(self, change: EditorChange, operation: Callable[[FrameStore], Any], record: bool = True) -> Any:
        """
        Run operation on a copy and commit it

        An operation returning False reports "nothing changed": no commit,
        no history entry, no notification.
        """
        working = self._animation.snapshot()
        result = operation(FrameStore(working))
        if result is False:
            return result

        if record:
            self.history.record(self._animation)
        self._animation = working
        self.revision += 1
        self._notify(change)
        return result

    # === Pixels ===

    def toggle_pixel(self, row: int, col: int, frame_index: Optional[int] = None):
        return self._apply(EditorChange.PIXELS, lambda store: store.toggle_pixel(row, col, frame_index))

    def clear_frame(self, frame_index: Optional[int] = None) -> bool:
        return self._apply(EditorChange.PIXELS, lambda store: store.clear_frame(frame_index))

    # === Frames ===

    def add_frame(self) -> int:
        return self._apply(EditorChange.FRAMES, lambda store: store.add_frame())

    def duplicate_frame(self, index: int) -> int:
        return self._apply(EditorChange.FRAMES, lambda store: store.duplicate_frame(index))

    def delete_frame(self, index: int) -> None:
        self._apply(EditorChange.FRAMES, lambda store: store.delete_frame(index))

    def reorder_frame(self, from_index: int, to_index: int) -> None:
        def move(store: FrameStore):
            store.reorder_frame(from_index, to_index)
            return from_index != to_index
        self._apply(EditorChange.FRAMES, move)

    def rename_frame(self, index: int, name: str) -> None:
        self._apply(EditorChange.FRAMES, lambda store: store.rename_frame(index, name))

    def select_frame(self, index: int) -> None:
        self._apply(EditorChange.SELECTION, lambda store: store.select_frame(index), record=False)

    def previous_frame(self) -> bool:
        return self._apply(EditorChange.SELECTION, lambda store: store.previous_frame(), record=False)

    def next_frame(self) -> bool:
        return self._apply(EditorChange.SELECTION, lambda store: store.next_frame(), record=False)

    # === Settings ===

    def set_draw_color(self, color) -> Color:
        color = Color.parse(color)
        self._apply(EditorChange.SETTINGS, lambda store: store.set_draw_color(color))
        return color

    def set_step_delay(self, delay_ms: int) -> None:
        self._apply(EditorChange.SETTINGS, lambda store: store.set_step_delay(delay_ms))

    def resize_grid(self, width: int, height: int) -> bool:
        return self._apply(EditorChange.GRID, lambda store: store.resize_grid(width, height))

    def set_orientation(self, orientation: Orientation) -> bool:
        return self._apply(EditorChange.GRID, lambda store: store.set_orientation(orientation))

    # === History ===

    def undo(self) -> bool:
        restored = self.history.undo(current=self._animation)
        if restored is None:
            return False
        self._animation = restored
        self.revision += 1
        self._notify(EditorChange.HISTORY)
        return True

    def redo(self) -> bool:
        restored = self.history.redo(current=self._animation)
        if restored is None:
            return False
        self._animation = restored
        self.revision += 1
        self._notify(EditorChange.HISTORY)
        return True

    # === Document ===

    def replace(self, animation: Animation, record: bool = True) -> None:
        """Swap in a whole new document (import / load)"""
        if record:
            self.history.record(self._animation)
        else:
            self.history.clear()
        self._animation = animation
        self.revision += 1
        self._notify(EditorChange.REPLACED)

    def import_json(self, text: str) -> Animation:
        """
        Replace the document with imported JSON.

        Raises:
            ImportFormatError: malformed document (state untouched)
        """
        animation = Serializer.animation_from_json(
            text,
            fallback_color=self._animation.draw_color,
            defaults=self.config
        )
        self.replace(animation)
        log.info("Imported animation", frames=animation.frame_count, pixels=animation.pixel_count)
        return animation

    def export_json(self) -> str:
        return Serializer.animation_to_json(self._animation)

    def mega_frame(self) -> MegaFrame:
        return build_mega_frame(self._animation.frames)
