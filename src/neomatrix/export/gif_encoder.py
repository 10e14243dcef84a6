"""
GIF89a encoder

Global palette, looping NETSCAPE2.0 extension and variable-width LZW, written
byte by byte. Frames are full-screen rasters of Color values (row-major,
width * height entries).

Block layout:
    "GIF89a"
    Logical Screen Descriptor + global color table
    NETSCAPE2.0 application extension (loop forever)
    per frame: Graphic Control Extension, Image Descriptor, LZW data
    trailer 0x3B
"""

import struct
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from neomatrix.models.color import Color
from neomatrix.models.errors import EmptyAnimationError, ImageSizeError, PaletteOverflowError
from neomatrix.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GIF)

MAX_PALETTE_SIZE = 256
MIN_PALETTE_SIZE = 4
MAX_CODE_SIZE = 12
MAX_DICT_SIZE = 1 << MAX_CODE_SIZE
MAX_IMAGE_SIDE = 0xFFFF

HEADER = b"GIF89a"
TRAILER = b"\x3b"
LOOP_FOREVER = b"\x21\xff\x0bNETSCAPE2.0\x03\x01\x00\x00\x00"

Raster = Sequence[Color]


def build_palette(rasters: Sequence[Raster]) -> List[Color]:
    """
    Global color table

    Index 0 is black, then colors in first-seen order, padded with black to
    the next power of two (minimum 4).

    Raises:
        PaletteOverflowError: more than 256 distinct colors
    """
    black = Color.black()
    palette: List[Color] = [black]
    seen = {black}

    for raster in rasters:
        for color in raster:
            if color not in seen:
                seen.add(color)
                palette.append(color)

    if len(palette) > MAX_PALETTE_SIZE:
        raise PaletteOverflowError(len(palette), MAX_PALETTE_SIZE)

    size = MIN_PALETTE_SIZE
    while size < len(palette):
        size *= 2
    palette.extend([black] * (size - len(palette)))
    return palette


def palette_bits(palette: Sequence[Color]) -> int:
    """log2 of the (power of two) palette size"""
    return max(1, (len(palette) - 1).bit_length())


def centiseconds(delay_ms: int) -> int:
    """GIF frame delay: ms / 10 rounded half up"""
    return (int(delay_ms) + 5) // 10


class _BitWriter:
    """LSB-first bit packer"""

    def __init__(self):
        self.buffer = bytearray()
        self._acc = 0
        self._bits = 0

    def write(self, code: int, size: int) -> None:
        self._acc |= code << self._bits
        self._bits += size
        while self._bits >= 8:
            self.buffer.append(self._acc & 0xFF)
            self._acc >>= 8
            self._bits -= 8

    def flush(self) -> bytes:
        if self._bits:
            self.buffer.append(self._acc & 0xFF)
            self._acc = 0
            self._bits = 0
        return bytes(self.buffer)


def lzw_encode(indices: Sequence[int], min_code_size: int) -> bytes:
    """
    GIF-flavor LZW

    One Clear code at the start, code width grows from min_code_size + 1 up
    to 12 bits, the table stops growing at 4096 entries.
    """
    clear_code = 1 << min_code_size
    eoi_code = clear_code + 1
    next_code = eoi_code + 1
    code_size = min_code_size + 1

    writer = _BitWriter()
    writer.write(clear_code, code_size)

    if not indices:
        writer.write(eoi_code, code_size)
        return writer.flush()

    table: Dict[Tuple[int, int], int] = {}
    prefix = indices[0]

    for index in indices[1:]:
        key = (prefix, index)
        code = table.get(key)
        if code is not None:
            prefix = code
            continue

        writer.write(prefix, code_size)
        if next_code < MAX_DICT_SIZE:
            table[key] = next_code
            next_code += 1
            if next_code > (1 << code_size) and code_size < MAX_CODE_SIZE:
                code_size += 1
        prefix = index

    writer.write(prefix, code_size)
    writer.write(eoi_code, code_size)
    return writer.flush()


def sub_blocks(data: bytes) -> bytes:
    """Split into <= 255-byte sub-blocks followed by the zero terminator"""
    out = bytearray()
    for start in range(0, len(data), 255):
        chunk = data[start:start + 255]
        out.append(len(chunk))
        out.extend(chunk)
    out.append(0)
    return bytes(out)


class GifEncoder:
    """
    Encodes full-frame rasters into an animated, looping GIF89a

    Frames may be any iterable (e.g. a generator); they are consumed one at
    a time when a palette is supplied, otherwise collected first to build it.

    Example:
        data = GifEncoder().encode(160, 160, [(raster, 200), (raster2, 200)])
    """

    def encode(
        self,
        width: int,
        height: int,
        frames: Iterable[Tuple[Raster, int]],
        palette: Optional[List[Color]] = None
    ) -> bytes:
        """
        Args:
            width: Image width in pixels
            height: Image height in pixels
            frames: (raster, delay_ms) pairs; raster is row-major Colors
            palette: Prebuilt global color table (see build_palette); built
                from the frames when omitted

        Returns:
            Complete GIF file contents

        Raises:
            ImageSizeError: width or height outside 1..65535
            EmptyAnimationError: no frames given
            PaletteOverflowError: more than 256 colors
            ValueError: a raster doesn't match width * height, or uses a
                color missing from the given palette
        """
        for side in (width, height):
            if not 1 <= side <= MAX_IMAGE_SIDE:
                raise ImageSizeError(width, height, MAX_IMAGE_SIDE)

        if palette is None:
            frames = list(frames)
            palette = build_palette([raster for raster, _ in frames])

        bits = palette_bits(palette)
        lookup = {}
        for i, color in enumerate(palette):
            lookup.setdefault(color, i)

        out = bytearray(HEADER)
        out += self._screen_descriptor(width, height, bits)
        for color in palette:
            out += bytes(color.to_rgb())
        out += LOOP_FOREVER

        pixel_count = width * height
        min_code_size = max(2, bits)
        frame_count = 0
        for raster, delay_ms in frames:
            if len(raster) != pixel_count:
                raise ValueError(f"Raster has {len(raster)} pixels, expected {pixel_count}")
            try:
                indices = [lookup[c] for c in raster]
            except KeyError as ex:
                raise ValueError(f"Color {ex.args[0]} is not in the palette") from None

            out += self._graphic_control(delay_ms)
            out += self._image_descriptor(width, height)
            out.append(min_code_size)
            out += sub_blocks(lzw_encode(indices, min_code_size))
            frame_count += 1

        if not frame_count:
            raise EmptyAnimationError("encode")

        out += TRAILER

        log.info(
            "Encoded GIF",
            size=f"{width}x{height}",
            frames=frame_count,
            colors=len(palette),
            bytes=len(out)
        )
        return bytes(out)

    @staticmethod
    def _screen_descriptor(width: int, height: int, bits: int) -> bytes:
        packed = 0x80 | ((bits - 1) << 4) | (bits - 1)
        return struct.pack("<HHBBB", width, height, packed, 0, 0)

    @staticmethod
    def _graphic_control(delay_ms: int) -> bytes:
        # disposal none, no user input, no transparency
        return b"\x21\xf9\x04\x00" + struct.pack("<H", centiseconds(delay_ms)) + b"\x00\x00"

    @staticmethod
    def _image_descriptor(width: int, height: int) -> bytes:
        return b"\x2c" + struct.pack("<HHHHB", 0, 0, width, height, 0)
