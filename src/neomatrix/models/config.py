"""
Editor configuration model

Typed view over the merged YAML config (config/*.yaml).
"""

from dataclasses import dataclass
from pathlib import Path

from neomatrix.models.color import Color
from neomatrix.models.enums import Orientation, LogLevel


@dataclass(frozen=True)
class EditorConfig:
    """Immutable editor configuration loaded by ConfigManager"""

    # === Editor defaults ===
    grid_width: int = 8
    grid_height: int = 8
    orientation: Orientation = Orientation.TOP_LEFT
    led_color: Color = Color(255, 0, 0)
    step_delay_ms: int = 200
    history_limit: int = 50

    # === Autosave ===
    autosave_path: Path = Path("state/autosave.json")
    autosave_interval_s: float = 30.0

    # === Export ===
    gif_cell_scale: int = 20

    # === Server ===
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: LogLevel = LogLevel.INFO
