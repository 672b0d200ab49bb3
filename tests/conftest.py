from __future__ import annotations

import struct
from typing import Callable, Optional, Sequence

import pytest

from bmpmark.bitmap.types import BLACK, WHITE, PixelBuffer

Row = Sequence[Sequence[int]]


def build_bmp(
    rows: Sequence[Row],
    bit_count: int = 24,
    offset: int = 54,
    signature: bytes = b"BM",
    compression: int = 0,
    width: Optional[int] = None,
    height: Optional[int] = None,
    header_size: int = 40,
    header_bit_count: Optional[int] = None,
    truncate: int = 0,
) -> bytes:
    """Build a bitmap file by hand from top-down rows of (r, g, b[, a]) tuples."""
    row_width = len(rows[0])
    stride = ((bit_count * row_width + 31) // 32) * 4
    data = bytearray()
    for row in reversed(rows):
        line = bytearray()
        for pixel in row:
            line += bytes([pixel[2], pixel[1], pixel[0]])
            if bit_count == 32:
                line.append(pixel[3] if len(pixel) > 3 else 255)
        line += bytes(stride - len(line))
        data += line
    file_header = struct.pack("<2sIHHI", signature, offset + len(data), 0, 0, offset)
    info_header = struct.pack(
        "<IiiHHIIiiII",
        header_size,
        row_width if width is None else width,
        len(rows) if height is None else height,
        1,
        bit_count if header_bit_count is None else header_bit_count,
        compression,
        len(data),
        2835,
        2835,
        0,
        0,
    )
    gap = bytes(max(0, offset - len(file_header) - len(info_header)))
    blob = file_header + info_header + gap + bytes(data)
    if truncate:
        blob = blob[:-truncate]
    return blob


def solid_rows(width: int, height: int, color=(0, 0, 0)):
    return [[color] * width for _ in range(height)]


@pytest.fixture
def write_bmp(tmp_path) -> Callable[..., str]:
    def write(rows: Sequence[Row], name: str = "image.bmp", **kwargs) -> str:
        path = tmp_path / name
        path.write_bytes(build_bmp(rows, **kwargs))
        return str(path)

    return write


@pytest.fixture
def black_buffer() -> PixelBuffer:
    return PixelBuffer.create(20, 20, BLACK)


@pytest.fixture
def checker_buffer() -> PixelBuffer:
    samples = [BLACK if (x + y) % 2 == 0 else WHITE for y in range(5) for x in range(7)]
    return PixelBuffer(7, 5, samples)


@pytest.fixture
def make_bmp() -> Callable[..., bytes]:
    return build_bmp


@pytest.fixture
def solid() -> Callable[..., list]:
    return solid_rows
