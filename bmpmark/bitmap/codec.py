from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from typing import BinaryIO, List

from ..errors import FormatError
from .headers import (
    COMPRESSION_NONE,
    FILE_HEADER_SIZE,
    INFO_HEADER_SIZE,
    PIXEL_DATA_OFFSET,
    SIGNATURE,
    FileHeader,
    InfoHeader,
    check_signature,
    row_stride,
    validate_headers,
)
from .types import PixelBuffer, Rgba

LOGGER = logging.getLogger(__name__)

SAVE_BIT_COUNT = 24


@dataclass(frozen=True)
class BitmapInfo:
    file_header: FileHeader
    info_header: InfoHeader

    @property
    def stride(self) -> int:
        return row_stride(self.info_header.bit_count, self.info_header.width)


def read_headers(handle: BinaryIO) -> BitmapInfo:
    """Read and validate both headers from the start of a binary stream."""
    file_header = FileHeader.unpack(handle.read(FILE_HEADER_SIZE))
    check_signature(file_header)
    info_header = InfoHeader.unpack(handle.read(INFO_HEADER_SIZE))
    validate_headers(file_header, info_header)
    return BitmapInfo(file_header, info_header)


def read_bitmap(handle: BinaryIO) -> PixelBuffer:
    """Decode a 24/32-bit uncompressed bitmap from a seekable binary stream.

    On-disk rows are stored bottom-up; the returned buffer is top-down.
    """
    info = read_headers(handle)
    header = info.info_header
    width = header.width
    height = header.height
    pixel_size = header.bytes_per_pixel
    has_alpha = header.bit_count == 32
    stride = info.stride
    row_bytes = pixel_size * width
    padding = stride - row_bytes
    offset = info.file_header.pixel_data_offset
    LOGGER.debug(
        "decoding %dx%d bitmap, %d bpp, stride %d, data at %d",
        width,
        height,
        header.bit_count,
        stride,
        offset,
    )

    handle.seek(0, os.SEEK_END)
    available = handle.tell()
    needed = offset + stride * (height - 1) + row_bytes
    if available < needed:
        raise FormatError(f"Truncated pixel data: {needed} bytes declared, file has {available}")

    rows: List[List[Rgba]] = []
    for y in range(height):
        handle.seek(offset + y * stride)
        data = handle.read(row_bytes)
        if len(data) < row_bytes:
            raise FormatError(f"Truncated pixel data in row {y}")
        row: List[Rgba] = []
        for i in range(0, row_bytes, pixel_size):
            alpha = data[i + 3] if has_alpha else 255
            row.append(Rgba(data[i + 2], data[i + 1], data[i], alpha))
        rows.append(row)
        handle.seek(padding, os.SEEK_CUR)
    rows.reverse()
    return PixelBuffer(width, height, [pixel for row in rows for pixel in row])


def load(path: str) -> PixelBuffer:
    """Load a bitmap file into a new pixel buffer."""
    with open(path, "rb") as handle:
        return read_bitmap(handle)


def read_info(path: str) -> BitmapInfo:
    """Return the validated headers of a bitmap file without decoding pixels."""
    with open(path, "rb") as handle:
        return read_headers(handle)


def encode_bitmap(buffer: PixelBuffer) -> bytes:
    """Serialize a buffer as a 24-bit bitmap. Alpha is dropped."""
    buffer.validate()
    width = buffer.width
    height = buffer.height
    stride = row_stride(SAVE_BIT_COUNT, width)
    image_size = stride * height
    file_header = FileHeader(
        signature=SIGNATURE,
        file_size=PIXEL_DATA_OFFSET + image_size,
        reserved1=0,
        reserved2=0,
        pixel_data_offset=PIXEL_DATA_OFFSET,
    )
    info_header = InfoHeader(
        header_size=INFO_HEADER_SIZE,
        width=width,
        height=height,
        planes=1,
        bit_count=SAVE_BIT_COUNT,
        compression=COMPRESSION_NONE,
        image_size=image_size,
    )
    padding = bytes(stride - 3 * width)
    out = bytearray()
    out += file_header.pack()
    out += info_header.pack()
    for y in range(height - 1, -1, -1):
        for pixel in buffer.row(y):
            out += bytes([pixel.blue, pixel.green, pixel.red])
        out += padding
    LOGGER.debug("encoded %dx%d bitmap, %d bytes", width, height, len(out))
    return bytes(out)


def write_bitmap(handle: BinaryIO, buffer: PixelBuffer) -> None:
    handle.write(encode_bitmap(buffer))


def _target_mode(path: str) -> int:
    """Keep an existing file's permissions, otherwise follow the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save(path: str, buffer: PixelBuffer) -> None:
    """Write a buffer to ``path`` as a 24-bit bitmap.

    The file is written next to the destination under a temporary name and
    renamed into place once complete.
    """
    if not path:
        raise FileNotFoundError("No output file name given")
    data = encode_bitmap(buffer)
    directory = os.path.dirname(os.path.abspath(path))
    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=directory, prefix=".bmpmark-", suffix=".tmp", delete=False
        ) as handle:
            temp_path = handle.name
            handle.write(data)
        os.chmod(temp_path, _target_mode(path))
        os.replace(temp_path, path)
        temp_path = None
    finally:
        if temp_path and os.path.exists(temp_path):
            os.remove(temp_path)
    LOGGER.debug("saved %s", path)
