"""
Code Generator - embedded Rust module for the scrolling marquee

Emits `nm_scroll_frames.rs`: frame data as const slices plus an NmScroll
struct whose next() reproduces MarqueeScroller.tick() step for step.
The firmware writes through the same orientation index formula as the
preview, so strip contents match LED for LED.

Output is deterministic: frames and pixels in insertion order, integer-only
formatting, "\\n" line endings, trailing newline.
"""

from typing import List, Sequence

from neomatrix.models.domain import Frame
from neomatrix.models.enums import Orientation
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CODEGEN)

MODULE_FILENAME = "nm_scroll_frames.rs"

# Strip index expression per orientation (x = col, y = row, w/h as isize)
_INDEX_EXPRESSIONS = {
    Orientation.TOP_LEFT: "y * w + x",
    Orientation.TOP_RIGHT: "x * w + (w - 1 - y)",
    Orientation.BOTTOM_LEFT: "(h - 1 - x) * w + y",
    Orientation.BOTTOM_RIGHT: "(h - 1 - y) * w + (w - 1 - x)",
}

_SCROLL_IMPL = """\
fn column_bounds(frame: &[Pixel]) -> (isize, isize) {
    let mut lo = isize::MAX;
    let mut hi = isize::MIN;
    for &(x, _, _, _, _) in frame.iter() {
        let x = x as isize;
        if x < lo {
            lo = x;
        }
        if x > hi {
            hi = x;
        }
    }
    (lo, hi)
}

pub struct NmScroll {
    strip: [RGB8; WIDTH * HEIGHT],
    frame: isize,
}

impl Default for NmScroll {
    fn default() -> Self {
        Self::new()
    }
}

impl NmScroll {
    pub fn new() -> Self {
        Self {
            strip: [RGB8::default(); WIDTH * HEIGHT],
            frame: 0,
        }
    }

    pub fn clear(&mut self) {
        for led in self.strip.iter_mut() {
            *led = RGB8::default();
        }
    }

    pub fn set(&mut self, x: isize, y: isize, color: RGB8) {
        if x < 0 || x >= WIDTH as isize {
            return;
        }
        if let Some(i) = strip_index(x, y) {
            self.strip[i] = color;
        }
    }

    pub fn to_list(&self) -> [RGB8; WIDTH * HEIGHT] {
        self.strip
    }

    pub fn next(&mut self) {
        self.clear();

        let mut min_x = isize::MAX;
        let mut max_x = isize::MIN;
        let mut cursor: isize = 0;
        for frame in FRAMES.iter() {
            if frame.is_empty() {
                continue;
            }
            let (lo, hi) = column_bounds(frame);
            if cursor < min_x {
                min_x = cursor;
            }
            if cursor + hi - lo > max_x {
                max_x = cursor + hi - lo;
            }
            cursor += hi - lo + 2;
        }
        if min_x > max_x {
            return;
        }

        let offset = (WIDTH as isize - min_x) - self.frame;

        cursor = 0;
        for frame in FRAMES.iter() {
            if frame.is_empty() {
                continue;
            }
            let (lo, hi) = column_bounds(frame);
            for &(x, y, r, g, b) in frame.iter() {
                let col = x as isize - lo + cursor + offset;
                if col >= 0 && col < WIDTH as isize {
                    self.set(col, y as isize, RGB8 { r, g, b });
                }
            }
            cursor += hi - lo + 2;
        }

        if offset + max_x < 0 {
            self.frame = 0;
        } else {
            self.frame += 1;
        }
    }
}
"""


def _frame_comment(name: str) -> str:
    return " ".join(str(name).replace("\r", "\n").split("\n")).strip()


def _frame_lines(index: int, frame: Frame) -> List[str]:
    lines = [f"// {_frame_comment(frame.name)}"]
    if frame.is_empty:
        lines.append(f"pub const FRAME_{index}: &[Pixel] = &[];")
        return lines

    lines.append(f"pub const FRAME_{index}: &[Pixel] = &[")
    for pixel in frame.coords:
        r, g, b = pixel.color.to_rgb()
        lines.append(f"    ({int(pixel.col)}, {int(pixel.row)}, {r}, {g}, {b}),")
    lines.append("];")
    return lines


def generate(
    frames: Sequence[Frame],
    width: int,
    height: int,
    step_delay_ms: int,
    orientation: Orientation = Orientation.TOP_LEFT
) -> str:
    """
    Build the Rust module source

    Args:
        frames: Frames in playback order (empty frames are kept as empty slices)
        width: Grid width (columns)
        height: Grid height (rows)
        step_delay_ms: Tick interval the caller should drive next() at
        orientation: LED wiring used by NmScroll::set

    Returns:
        Module source text
    """
    orientation = Orientation.parse(orientation, default=Orientation.TOP_LEFT)

    lines: List[str] = []
    lines.append(f"// {MODULE_FILENAME}")
    lines.append("// Generated by NeoMatrix Frame Creator. Do not edit by hand.")
    lines.append(f"// Orientation: {orientation.value}")
    lines.append("")
    lines.append("use smart_leds::RGB8;")
    lines.append("")
    lines.append(f"pub const WIDTH: usize = {int(width)};")
    lines.append(f"pub const HEIGHT: usize = {int(height)};")
    lines.append(f"pub const STEP_DELAY_MS: u32 = {int(step_delay_ms)};")
    lines.append("")
    lines.append("/// (x, y, r, g, b)")
    lines.append("pub type Pixel = (usize, usize, u8, u8, u8);")
    lines.append("")

    for index, frame in enumerate(frames):
        lines.extend(_frame_lines(index, frame))
        lines.append("")

    names = ", ".join(f"FRAME_{i}" for i in range(len(frames)))
    lines.append(f"pub const FRAMES: [&[Pixel]; {len(frames)}] = [{names}];")
    lines.append("")

    lines.append("#[allow(unused_variables)]")
    lines.append("fn strip_index(x: isize, y: isize) -> Option<usize> {")
    lines.append("    let w = WIDTH as isize;")
    lines.append("    let h = HEIGHT as isize;")
    lines.append(f"    let i = {_INDEX_EXPRESSIONS[orientation]};")
    lines.append("    if i >= 0 && i < w * h {")
    lines.append("        Some(i as usize)")
    lines.append("    } else {")
    lines.append("        None")
    lines.append("    }")
    lines.append("}")
    lines.append("")

    source = "\n".join(lines) + "\n" + _SCROLL_IMPL

    log.info(
        "Generated scroll module",
        frames=len(frames),
        pixels=sum(len(f.coords) for f in frames),
        grid=f"{width}x{height}",
        bytes=len(source)
    )
    return source
