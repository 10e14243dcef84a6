"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and builds the typed EditorConfig.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from neomatrix.models.color import Color
from neomatrix.models.config import EditorConfig
from neomatrix.models.domain.grid import GridConfig
from neomatrix.models.enums import Orientation, LogLevel
from neomatrix.models.errors import DomainError
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

PACKAGE_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Falls back to factory_defaults.yaml when the main config can't be loaded.

    Example:
        config_manager = ConfigManager()
        config_manager.load()

        config = config_manager.config          # EditorConfig
        delay = config.step_delay_ms
    """

    def __init__(
        self,
        config_path: str = "config/config.yaml",
        defaults_path: str = "config/factory_defaults.yaml",
        base_dir: Optional[Path] = None
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback
            base_dir: Directory relative paths resolve against (default: package dir)
        """
        self.base_dir = Path(base_dir) if base_dir is not None else PACKAGE_DIR
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: EditorConfig = EditorConfig()

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path

    def load(self) -> EditorConfig:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory_defaults.yaml on failure
        5. Build EditorConfig

        Returns:
            EditorConfig built from merged data
        """
        full_path = self._resolve(self.config_path)
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config['include'], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

            self.config = self._build_config(self.data)

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = self._resolve(self.factory_defaults_path)
            with open(defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}
            self.config = self._build_config(self.data)

        log.info(
            "Editor config ready",
            grid=f"{self.config.grid_width}x{self.config.grid_height}",
            orientation=self.config.orientation.value,
            autosave=str(self.config.autosave_path)
        )
        return self.config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["editor.yaml", "export.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    def _build_config(self, data: Dict[str, Any]) -> EditorConfig:
        """
        Convert merged YAML sections to EditorConfig

        Sections: editor, autosave, export, server. Missing keys take
        EditorConfig defaults; invalid values raise (caught by load()).
        """
        defaults = EditorConfig()
        editor = data.get("editor") or {}
        autosave = data.get("autosave") or {}
        export = data.get("export") or {}
        server = data.get("server") or {}

        width = int(editor.get("grid_width", defaults.grid_width))
        height = int(editor.get("grid_height", defaults.grid_height))
        # Validates the size range
        GridConfig(width=width, height=height)

        step_delay_ms = int(editor.get("step_delay_ms", defaults.step_delay_ms))
        history_limit = int(editor.get("history_limit", defaults.history_limit))
        cell_scale = int(export.get("gif_cell_scale", defaults.gif_cell_scale))
        if step_delay_ms < 50 or history_limit < 1 or cell_scale < 1:
            raise DomainError("INVALID_CONFIG", "step_delay_ms, history_limit or gif_cell_scale out of range")

        return EditorConfig(
            grid_width=width,
            grid_height=height,
            orientation=Orientation.parse(editor.get("orientation", defaults.orientation.value)),
            led_color=Color.from_hex(editor.get("led_color", defaults.led_color.to_hex())),
            step_delay_ms=step_delay_ms,
            history_limit=history_limit,
            autosave_path=Path(autosave.get("path", str(defaults.autosave_path))),
            autosave_interval_s=float(autosave.get("interval_s", defaults.autosave_interval_s)),
            gif_cell_scale=cell_scale,
            api_host=str(server.get("host", defaults.api_host)),
            api_port=int(server.get("port", defaults.api_port)),
            log_level=LogLevel[str(server.get("log_level", defaults.log_level.name)).upper()],
        )
