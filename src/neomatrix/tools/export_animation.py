"""
Offline export tool

Converts a saved animation document into any export format without running
the editor:

    neomatrix-export frames.json --format gif --scale 10
    neomatrix-export frames.json --format rust --output firmware/src/nm_scroll_frames.rs
"""

import sys
from pathlib import Path
from typing import List, Optional

from neomatrix.export.rasterizer import DEFAULT_CELL_SCALE
from neomatrix.models.enums import ExportFormat
from neomatrix.models.errors import DomainError
from neomatrix.services.export_service import ExportService
from neomatrix.utils.serialization import Serializer


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for offline export."""
    import argparse

    parser = argparse.ArgumentParser(description="Export a NeoMatrix animation document")
    parser.add_argument(
        "input",
        help="Animation JSON document",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.RUST.value,
        help="Export format (default: rust)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (default: the format's standard file name in the current directory)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=DEFAULT_CELL_SCALE,
        help=f"GIF pixels per LED cell (default: {DEFAULT_CELL_SCALE})",
    )

    args = parser.parse_args(argv)

    if args.scale < 1:
        print("❌ --scale must be at least 1", file=sys.stderr)
        return 2

    try:
        text = Path(args.input).read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        animation = Serializer.animation_from_json(text)
        artifact = ExportService(gif_cell_scale=args.scale).export(animation, ExportFormat(args.format))
    except DomainError as e:
        print(f"❌ {e.code}: {e.message}", file=sys.stderr)
        for error in e.details.get("errors", []):
            print(f"    {error['field']}: {error['message']}", file=sys.stderr)
        return 1

    output = Path(args.output) if args.output else Path(artifact.filename)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(artifact.content)

    print(f"✅ Wrote {output} ({artifact.size} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
