"""
Tests for the GIF89a encoder and scroll rasterizer, decoded with Pillow.
"""

import inspect
import io
import random

import pytest
from PIL import Image

from neomatrix.export.gif_encoder import (
    GifEncoder, build_palette, centiseconds, lzw_encode, palette_bits
)
from neomatrix.export.rasterizer import (
    rasterize_strip, render_scroll_frames, render_scroll_gif, scroll_strips, strip_palette
)
from neomatrix.models.color import Color
from neomatrix.models.domain import Animation
from neomatrix.models.errors import EmptyAnimationError, ImageSizeError, PaletteOverflowError

from conftest import BLUE, GREEN, RED, make_animation, make_frame

BLACK = Color.black()


def decode(data):
    image = Image.open(io.BytesIO(data))
    frames = []
    durations = []
    for i in range(getattr(image, "n_frames", 1)):
        image.seek(i)
        frames.append(image.convert("RGB"))
        durations.append(image.info.get("duration"))
    return image, frames, durations


class TestPalette:

    def test_black_first_then_first_seen_order(self):
        palette = build_palette([[GREEN, BLACK, RED, GREEN], [BLUE]])
        assert palette[:4] == [BLACK, GREEN, RED, BLUE]
        assert len(palette) == 4

    def test_padded_to_power_of_two(self):
        colors = [Color(i, 0, 0) for i in range(1, 5)]
        palette = build_palette([colors])
        assert len(palette) == 8
        assert palette[5:] == [BLACK] * 3
        assert palette_bits(palette) == 3

    def test_minimum_size(self):
        palette = build_palette([[BLACK]])
        assert len(palette) == 4
        assert palette_bits(palette) == 2

    def test_overflow(self):
        colors = [Color(i % 256, i // 256, 1) for i in range(256)]
        with pytest.raises(PaletteOverflowError):
            build_palette([colors])

    def test_exactly_256(self):
        colors = [Color(i, 0, 1) for i in range(255)]
        palette = build_palette([colors])
        assert len(palette) == 256
        assert palette_bits(palette) == 8


class TestEncoder:

    def test_header_and_trailer(self):
        data = GifEncoder().encode(2, 2, [([RED, BLACK, BLACK, GREEN], 100)])
        assert data[:6] == b"GIF89a"
        assert data[-1:] == b"\x3b"
        assert b"NETSCAPE2.0\x03\x01\x00\x00\x00" in data
        # width, height, packed (global table, 4 colors), background, aspect
        assert data[6:13] == bytes([2, 0, 2, 0, 0x91, 0, 0])

    def test_single_frame_decodes(self):
        raster = [RED, BLACK, BLACK, GREEN]
        image, frames, _ = decode(GifEncoder().encode(2, 2, [(raster, 100)]))
        assert image.size == (2, 2)
        assert list(frames[0].getdata()) == [c.to_rgb() for c in raster]

    def test_frames_delay_and_loop(self):
        a = [RED] * 4
        b = [BLUE] * 4
        image, frames, durations = decode(GifEncoder().encode(2, 2, [(a, 200), (b, 200)]))
        assert len(frames) == 2
        assert durations == [200, 200]
        assert image.info.get("loop") == 0
        assert frames[1].getpixel((0, 0)) == BLUE.to_rgb()

    def test_large_random_frame_survives_lzw(self):
        rng = random.Random(7)
        colors = [Color(rng.randrange(256), rng.randrange(256), rng.randrange(256)) for _ in range(40)]
        raster = [rng.choice(colors) for _ in range(120 * 90)]
        _, frames, _ = decode(GifEncoder().encode(120, 90, [(raster, 50)]))
        assert list(frames[0].getdata()) == [c.to_rgb() for c in raster]

    def test_no_frames(self):
        with pytest.raises(EmptyAnimationError):
            GifEncoder().encode(2, 2, [])

    def test_raster_size_mismatch(self):
        with pytest.raises(ValueError):
            GifEncoder().encode(2, 2, [([RED], 100)])

    def test_oversized_image_rejected_before_frames_are_read(self):
        def frames():
            raise AssertionError("frames consumed")
            yield

        with pytest.raises(ImageSizeError) as exc_info:
            GifEncoder().encode(70000, 1, frames())
        assert exc_info.value.code == "IMAGE_TOO_LARGE"
        assert exc_info.value.details["width"] == 70000

    def test_largest_side_accepted(self):
        data = GifEncoder().encode(0xFFFF, 1, [([BLACK] * 0xFFFF, 100)])
        assert data[6:10] == bytes([0xFF, 0xFF, 1, 0])

    def test_frames_from_generator_with_palette(self):
        rasters = [[RED, BLACK, BLACK, GREEN], [BLUE] * 4]
        palette = build_palette(rasters)
        streamed = GifEncoder().encode(2, 2, ((r, 100) for r in rasters), palette=palette)
        assert streamed == GifEncoder().encode(2, 2, [(r, 100) for r in rasters])

    def test_color_missing_from_palette(self):
        with pytest.raises(ValueError):
            GifEncoder().encode(2, 2, [([BLUE] * 4, 100)], palette=build_palette([[RED]]))


class TestHelpers:

    @pytest.mark.parametrize("delay_ms,expected", [(200, 20), (55, 6), (54, 5), (50, 5)])
    def test_centiseconds_round_half_up(self, delay_ms, expected):
        assert centiseconds(delay_ms) == expected

    def test_lzw_starts_with_clear_code(self):
        data = lzw_encode([0, 0, 0, 0], 2)
        # first 3-bit code is Clear (4)
        assert data[0] & 0b111 == 4


class TestRasterizer:

    def test_strip_to_blocks(self):
        strip = [None] * 4
        strip[1] = RED  # x = 1, y = 0 on a 2x2 grid
        bitmap = rasterize_strip(strip, 2, 2, 3)
        assert len(bitmap) == 6 * 6
        assert bitmap[0 * 6 + 3] == RED
        assert bitmap[2 * 6 + 5] == RED
        assert bitmap[3 * 6 + 3] == BLACK
        assert bitmap[0] == BLACK

    def test_single_pixel_scroll_gif(self):
        animation = make_animation([make_frame("A", (0, 0, RED))], step_delay_ms=200)
        image, frames, durations = decode(render_scroll_gif(animation, cell_scale=2))

        # one full cycle: (max - min) + W + 1
        assert len(frames) == 0 + 8 + 1
        assert image.size == (16, 16)
        assert all(d == 200 for d in durations)
        assert image.info.get("loop") == 0

        # second tick: offset 7 -> LED (0, 7)
        assert frames[1].getpixel((14, 0)) == RED.to_rgb()
        assert frames[1].getpixel((0, 0)) == BLACK.to_rgb()
        # last tick: offset 0 -> LED (0, 0)
        assert frames[-1].getpixel((1, 1)) == RED.to_rgb()

    def test_empty_animation(self):
        with pytest.raises(EmptyAnimationError):
            render_scroll_gif(Animation())

    def test_frames_rendered_lazily(self, two_pixel_animation):
        frames = render_scroll_frames(two_pixel_animation, cell_scale=2)
        assert inspect.isgenerator(frames)

        bitmap, delay = next(frames)
        assert len(bitmap) == 16 * 16
        assert delay == two_pixel_animation.step_delay_ms
        assert sum(1 for _ in frames) == len(scroll_strips(two_pixel_animation)) - 1

    def test_frame_arguments_checked_on_call(self):
        with pytest.raises(EmptyAnimationError):
            render_scroll_frames(Animation())
        with pytest.raises(ValueError):
            render_scroll_frames(make_animation([make_frame("A", (0, 0, RED))]), cell_scale=0)

    def test_strip_palette_matches_bitmap_palette(self):
        animation = make_animation([
            make_frame("A", (3, 2, BLUE), (0, 6, GREEN)),
            make_frame("B", (1, 1, RED), (7, 0, BLUE)),
        ])
        bitmaps = [bitmap for bitmap, _ in render_scroll_frames(animation, cell_scale=3)]
        assert strip_palette(scroll_strips(animation)) == build_palette(bitmaps)

    def test_oversized_scale(self, two_pixel_animation):
        with pytest.raises(ImageSizeError):
            render_scroll_gif(two_pixel_animation, cell_scale=10000)
