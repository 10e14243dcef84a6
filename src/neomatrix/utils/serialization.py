"""
Serialization utilities - Animation <-> JSON document / CSV

Wire format (pretty-printed JSON, 2-space indent):

    {
      "gridWidth": 8,
      "gridHeight": 8,
      "orientation": "top-left",
      "ledColor": "#ff0000",
      "animationSpeedMs": 200,
      "frames": [{"name": "Frame 1", "coords": [{"row": 0, "col": 0, "color": "#ff0000"}]}]
    }

The autosave blob adds "currentFrameIndex".
"""

import csv
import io
import json
from typing import Any, Dict, Optional

from pydantic import ValidationError

from neomatrix.models.color import Color
from neomatrix.models.config import EditorConfig
from neomatrix.models.document import AnimationDocument
from neomatrix.models.domain import (
    Animation, Frame, GridConfig, Pixel, default_frame_name, MIN_STEP_DELAY_MS
)
from neomatrix.models.enums import Orientation
from neomatrix.models.errors import ImportFormatError
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CODEC)

CSV_HEADER = ["frame", "row", "col", "color"]


class Serializer:
    """Central Animation serialization for export, import and autosave"""

    # ========================================================================
    # EXPORT
    # ========================================================================

    @staticmethod
    def pixel_to_dict(pixel: Pixel) -> Dict[str, Any]:
        return {"row": pixel.row, "col": pixel.col, "color": pixel.color.to_hex()}

    @staticmethod
    def frame_to_dict(frame: Frame) -> Dict[str, Any]:
        return {
            "name": frame.name,
            "coords": [Serializer.pixel_to_dict(p) for p in frame.coords],
        }

    @staticmethod
    def animation_to_dict(animation: Animation, include_state: bool = False) -> Dict[str, Any]:
        """
        Convert Animation to the exported document dict

        Args:
            animation: Animation to export
            include_state: Add currentFrameIndex (autosave blob)
        """
        data = {
            "gridWidth": animation.grid.width,
            "gridHeight": animation.grid.height,
            "orientation": animation.grid.orientation.value,
            "ledColor": animation.draw_color.to_hex(),
            "animationSpeedMs": animation.step_delay_ms,
            "frames": [Serializer.frame_to_dict(f) for f in animation.frames],
        }
        if include_state:
            data["currentFrameIndex"] = animation.current_index
        return data

    @staticmethod
    def animation_to_json(animation: Animation, include_state: bool = False) -> str:
        return json.dumps(Serializer.animation_to_dict(animation, include_state), indent=2)

    @staticmethod
    def animation_to_csv(animation: Animation) -> str:
        """One row per pixel: frame (1-based), row, col, color"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for number, frame in enumerate(animation.frames, start=1):
            for pixel in frame.coords:
                writer.writerow([number, pixel.row, pixel.col, pixel.color.to_hex()])
        return buffer.getvalue()

    # ========================================================================
    # IMPORT
    # ========================================================================

    @staticmethod
    def animation_from_dict(
        data: Any,
        fallback_color: Optional[Color] = None,
        defaults: Optional[EditorConfig] = None
    ) -> Animation:
        """
        Build a new Animation from an imported document

        Args:
            data: Parsed JSON document
            fallback_color: Color for pixels when neither the pixel nor the
                document carries one (the caller's active draw color)
            defaults: Grid size / step delay used when the document omits them

        Raises:
            ImportFormatError: document shape is invalid
        """
        defaults = defaults or EditorConfig()
        fallback_color = fallback_color or defaults.led_color

        try:
            doc = AnimationDocument.model_validate(data)
        except ValidationError as ex:
            errors = [
                {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
                for err in ex.errors()
            ]
            log.warn("Rejected import", errors=len(errors))
            raise ImportFormatError("Invalid animation document", errors) from None

        try:
            orientation = Orientation.parse(doc.orientation)
        except ValueError:
            if doc.orientation is not None:
                log.warn(f"Unknown orientation '{doc.orientation}', using top-left")
            orientation = Orientation.TOP_LEFT

        grid = GridConfig(
            width=doc.grid_width if doc.grid_width is not None else defaults.grid_width,
            height=doc.grid_height if doc.grid_height is not None else defaults.grid_height,
            orientation=orientation,
        )

        led_color = Color.from_hex(doc.led_color) if doc.led_color else None
        pixel_default = led_color or fallback_color

        frames = []
        for i, frame_doc in enumerate(doc.frames):
            frame = Frame(name=frame_doc.name if frame_doc.name is not None else default_frame_name(i))
            seen = set()
            for pixel_doc in frame_doc.coords:
                cell = (pixel_doc.row, pixel_doc.col)
                if cell in seen:
                    continue
                seen.add(cell)
                color = Color.from_hex(pixel_doc.color) if pixel_doc.color else pixel_default
                frame.coords.append(Pixel(row=pixel_doc.row, col=pixel_doc.col, color=color))
            frames.append(frame)

        speed = doc.animation_speed_ms
        if speed is None or speed < MIN_STEP_DELAY_MS:
            speed = defaults.step_delay_ms

        current = doc.current_frame_index or 0
        current = max(0, min(current, len(frames) - 1))

        animation = Animation(
            grid=grid,
            frames=frames,
            current_index=current,
            draw_color=led_color or fallback_color,
            step_delay_ms=speed,
        )
        log.debug(
            "Document parsed",
            grid=f"{grid.width}x{grid.height}",
            frames=animation.frame_count,
            pixels=animation.pixel_count
        )
        return animation

    @staticmethod
    def animation_from_json(
        text: str,
        fallback_color: Optional[Color] = None,
        defaults: Optional[EditorConfig] = None
    ) -> Animation:
        """Parse JSON text (see animation_from_dict)"""
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as ex:
            raise ImportFormatError(f"Invalid JSON: {ex}") from None
        return Serializer.animation_from_dict(data, fallback_color, defaults)
