"""Export service - Named export artifacts for every supported format"""

import asyncio
from dataclasses import dataclass

from neomatrix.export import code_generator
from neomatrix.export.rasterizer import render_scroll_gif, DEFAULT_CELL_SCALE
from neomatrix.models.domain import Animation
from neomatrix.models.enums import ExportFormat
from neomatrix.utils.logger import get_logger, LogCategory
from neomatrix.utils.serialization import Serializer

log = get_logger().for_category(LogCategory.CODEC)


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable export: file name, MIME type and raw bytes"""
    filename: str
    media_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class ExportService:
    """
    Produces export artifacts from an Animation snapshot

    Example:
        artifact = ExportService().export(editor.animation, ExportFormat.GIF)
        Path(artifact.filename).write_bytes(artifact.content)
    """

    def __init__(self, gif_cell_scale: int = DEFAULT_CELL_SCALE):
        self.gif_cell_scale = gif_cell_scale

    def export(self, animation: Animation, fmt: ExportFormat) -> ExportArtifact:
        fmt = ExportFormat(fmt)
        if fmt == ExportFormat.JSON:
            artifact = self.export_json(animation)
        elif fmt == ExportFormat.CSV:
            artifact = self.export_csv(animation)
        elif fmt == ExportFormat.RUST:
            artifact = self.export_rust(animation)
        else:
            artifact = self.export_gif(animation)

        log.info(f"Exported {artifact.filename}", format=fmt.value, bytes=artifact.size)
        return artifact

    async def export_async(self, animation: Animation, fmt: ExportFormat) -> ExportArtifact:
        """
        export() on the default thread pool

        The animation is snapshotted on the calling loop before the hand-off.
        """
        snapshot = animation.snapshot()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.export, snapshot, fmt)

    def export_json(self, animation: Animation) -> ExportArtifact:
        text = Serializer.animation_to_json(animation)
        return ExportArtifact("frames.json", "application/json", text.encode("utf-8"))

    def export_csv(self, animation: Animation) -> ExportArtifact:
        text = Serializer.animation_to_csv(animation)
        return ExportArtifact("frames.csv", "text/csv", text.encode("utf-8"))

    def export_rust(self, animation: Animation) -> ExportArtifact:
        grid = animation.grid
        source = code_generator.generate(
            animation.frames,
            grid.width,
            grid.height,
            animation.step_delay_ms,
            grid.orientation
        )
        return ExportArtifact(code_generator.MODULE_FILENAME, "text/x-rust", source.encode("utf-8"))

    def export_gif(self, animation: Animation, cell_scale: int = None) -> ExportArtifact:
        data = render_scroll_gif(animation, cell_scale or self.gif_cell_scale)
        return ExportArtifact("animation.gif", "image/gif", data)
