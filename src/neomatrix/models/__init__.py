"""
Models package - Data models for the NeoMatrix frame editor
"""

from .enums import Orientation, ExportFormat, EditorChange, LogLevel, LogCategory
from .color import Color

__all__ = [
    'Orientation',
    'ExportFormat',
    'EditorChange',
    'LogLevel',
    'LogCategory',
    'Color',
]
