"""Layout and on-disk formats of monospaced glyph atlases.

A font atlas is a square grid of padded glyph cells stored as a top-down
32-bit BMP, together with a small metrics file recording the glyph padding,
width and height. The glyphs are the printable ASCII characters in order.
"""

from __future__ import annotations

import math
import os
import struct
from dataclasses import dataclass

FIRST_ASCII = 32
LAST_ASCII = 126
NUM_GLYPHS = LAST_ASCII - FIRST_ASCII
GLYPH_PADDING = 4
BYTES_PER_PIXEL = 4

BMP_SIGNATURE = 0x4D42
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
BI_RGB = 0

_FILE_HEADER = struct.Struct("<HIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
_METRICS = struct.Struct("<BHH")


@dataclass(frozen=True)
class FontMetrics:
    """Padding and cell size of the glyphs in an atlas, in pixels."""

    padding: int
    glyph_width: int
    glyph_height: int

    def __post_init__(self) -> None:
        if not 0 <= self.padding <= 0xFF:
            raise ValueError("padding must fit in one byte")
        for name in ("glyph_width", "glyph_height"):
            if not 0 <= getattr(self, name) <= 0xFFFF:
                raise ValueError(f"{name} must fit in two bytes")

    def to_bytes(self) -> bytes:
        """The 5-byte metrics record: padding, then width and height as u16 LE."""
        return _METRICS.pack(self.padding, self.glyph_width, self.glyph_height)

    @classmethod
    def from_bytes(cls, data: bytes) -> FontMetrics:
        """Parse a record produced by :meth:`to_bytes`."""
        if len(data) != _METRICS.size:
            raise ValueError(f"metrics record must be {_METRICS.size} bytes, got {len(data)}")
        padding, width, height = _METRICS.unpack(data)
        return cls(padding, width, height)


@dataclass(frozen=True)
class AtlasLayout:
    """Placement of glyph cells in a square atlas grid."""

    glyph_width: int
    glyph_height: int
    num_glyphs: int
    padding: int
    row_count: int
    padded_width: int
    padded_height: int
    width: int
    height: int

    def glyph_origin(self, index: int) -> tuple[int, int]:
        """Top-left pixel of the glyph at ``index``, inside its padding."""
        if not 0 <= index < self.num_glyphs:
            raise IndexError(f"glyph index {index} out of range")
        row, col = divmod(index, self.row_count)
        return (col * self.padded_width + self.padding, row * self.padded_height + self.padding)


def atlas_layout(
    glyph_width: int,
    glyph_height: int,
    num_glyphs: int = NUM_GLYPHS,
    padding: int = GLYPH_PADDING,
) -> AtlasLayout:
    """Lay ``num_glyphs`` padded cells out in a square grid."""
    if glyph_width < 0 or glyph_height < 0:
        raise ValueError("glyph dimensions must not be negative")
    if num_glyphs < 1:
        raise ValueError("num_glyphs must be positive")
    if padding < 0:
        raise ValueError("padding must not be negative")
    row_count = math.ceil(math.sqrt(num_glyphs))
    padded_width = glyph_width + 2 * padding
    padded_height = glyph_height + 2 * padding
    return AtlasLayout(
        glyph_width=glyph_width,
        glyph_height=glyph_height,
        num_glyphs=num_glyphs,
        padding=padding,
        row_count=row_count,
        padded_width=padded_width,
        padded_height=padded_height,
        width=row_count * padded_width,
        height=row_count * padded_height,
    )


def bmp_headers(width: int, height: int) -> bytes:
    """File and info headers of a top-down 32-bit uncompressed BMP."""
    if width < 0 or height < 0:
        raise ValueError("bitmap dimensions must not be negative")
    image_size = width * height * BYTES_PER_PIXEL
    offset = FILE_HEADER_SIZE + INFO_HEADER_SIZE
    file_header = _FILE_HEADER.pack(BMP_SIGNATURE, offset + image_size, 0, 0, offset)
    info_header = _INFO_HEADER.pack(
        INFO_HEADER_SIZE, width, -height, 1, 8 * BYTES_PER_PIXEL, BI_RGB, 0, 0, 0, 0, 0
    )
    return file_header + info_header


def write_atlas_bmp(
    path: str | os.PathLike[str], width: int, height: int, pixels: bytes
) -> None:
    """Write a 32-bit top-down BMP, replacing any existing file."""
    pixels = bytes(pixels)
    expected = width * height * BYTES_PER_PIXEL
    if len(pixels) != expected:
        raise ValueError(f"expected {expected} bytes of pixel data, got {len(pixels)}")
    with open(path, "wb") as handle:
        handle.write(bmp_headers(width, height))
        handle.write(pixels)


def write_font_metadata(path: str | os.PathLike[str], metrics: FontMetrics) -> None:
    """Write the metrics record, replacing any existing file."""
    with open(path, "wb") as handle:
        handle.write(metrics.to_bytes())


def read_font_metadata(path: str | os.PathLike[str]) -> FontMetrics:
    """Read a metrics record written by :func:`write_font_metadata`."""
    with open(path, "rb") as handle:
        return FontMetrics.from_bytes(handle.read())