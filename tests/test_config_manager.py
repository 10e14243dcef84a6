"""
Tests for YAML configuration loading
"""

from pathlib import Path

from neomatrix.managers.config_manager import ConfigManager
from neomatrix.models.color import Color
from neomatrix.models.enums import LogLevel, Orientation


def write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestConfigManager:

    def test_loads_packaged_config(self):
        config = ConfigManager().load()
        assert (config.grid_width, config.grid_height) == (8, 8)
        assert config.orientation == Orientation.TOP_LEFT
        assert config.led_color == Color(255, 0, 0)
        assert config.step_delay_ms == 200
        assert config.history_limit == 50
        assert config.gif_cell_scale == 20
        assert config.api_port == 8000

    def test_include_files_are_merged(self, tmp_path):
        write(tmp_path / "config" / "config.yaml", "include:\n  - editor.yaml\n  - server.yaml\n")
        write(
            tmp_path / "config" / "editor.yaml",
            "editor:\n  grid_width: 16\n  grid_height: 4\n  orientation: bottom-right\n  led_color: '#00ff00'\n",
        )
        write(tmp_path / "config" / "server.yaml", "server:\n  port: 9100\n  log_level: debug\n")

        manager = ConfigManager(base_dir=tmp_path)
        config = manager.load()

        assert (config.grid_width, config.grid_height) == (16, 4)
        assert config.orientation == Orientation.BOTTOM_RIGHT
        assert config.led_color == Color(0, 255, 0)
        assert config.api_port == 9100
        assert config.log_level == LogLevel.DEBUG
        # sections not supplied keep their defaults
        assert config.step_delay_ms == 200
        assert set(manager.data) == {"editor", "server"}

    def test_monolithic_config(self, tmp_path):
        write(tmp_path / "config.yaml", "editor:\n  step_delay_ms: 80\nautosave:\n  interval_s: 5\n")
        config = ConfigManager(config_path="config.yaml", base_dir=tmp_path).load()
        assert config.step_delay_ms == 80
        assert config.autosave_interval_s == 5.0

    def test_missing_include_falls_back_to_factory_defaults(self, tmp_path):
        write(tmp_path / "config.yaml", "include:\n  - missing.yaml\n")
        write(tmp_path / "defaults.yaml", "editor:\n  grid_width: 12\n  grid_height: 12\n")

        config = ConfigManager(
            config_path="config.yaml",
            defaults_path="defaults.yaml",
            base_dir=tmp_path
        ).load()
        assert (config.grid_width, config.grid_height) == (12, 12)

    def test_invalid_values_fall_back_to_factory_defaults(self, tmp_path):
        write(tmp_path / "config.yaml", "editor:\n  grid_width: 100\n")
        write(tmp_path / "defaults.yaml", "editor:\n  step_delay_ms: 150\n")

        config = ConfigManager(
            config_path="config.yaml",
            defaults_path="defaults.yaml",
            base_dir=tmp_path
        ).load()
        assert config.grid_width == 8
        assert config.step_delay_ms == 150
