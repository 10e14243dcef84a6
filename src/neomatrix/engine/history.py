"""
Animation History - bounded undo/redo stacks of Animation snapshots
"""

from typing import List, Optional

from neomatrix.models.domain import Animation
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HISTORY)

DEFAULT_HISTORY_LIMIT = 50


class AnimationHistory:
    """
    Undo/redo over whole-animation snapshots

    record() stores the state *before* a mutation and clears the redo stack.
    When the undo stack exceeds its limit the oldest entry is evicted.

    Example:
        history = AnimationHistory(limit=50)
        history.record(animation.snapshot())
        ...mutate...
        previous = history.undo(current=animation)
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"History limit must be >= 1 (got {limit})")
        self.limit = limit
        self._undo: List[Animation] = []
        self._redo: List[Animation] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def record(self, before: Animation) -> None:
        self._undo.append(before)
        if len(self._undo) > self.limit:
            self._undo.pop(0)
        self._redo.clear()

    def undo(self, current: Animation) -> Optional[Animation]:
        """Pop the previous state, pushing `current` onto redo. None when empty."""
        if not self._undo:
            return None
        self._redo.append(current)
        restored = self._undo.pop()
        log.debug("Undo", undo_depth=len(self._undo), redo_depth=len(self._redo))
        return restored

    def redo(self, current: Animation) -> Optional[Animation]:
        """Pop the next state, pushing `current` back onto undo. None when empty."""
        if not self._redo:
            return None
        self._undo.append(current)
        if len(self._undo) > self.limit:
            self._undo.pop(0)
        restored = self._redo.pop()
        log.debug("Redo", undo_depth=len(self._undo), redo_depth=len(self._redo))
        return restored

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
