from __future__ import annotations

import struct
from dataclasses import dataclass

from ..errors import FormatError

SIGNATURE = b"BM"
FILE_HEADER_FORMAT = "<2sIHHI"
INFO_HEADER_FORMAT = "<IiiHHIIiiII"
FILE_HEADER_SIZE = struct.calcsize(FILE_HEADER_FORMAT)
INFO_HEADER_SIZE = struct.calcsize(INFO_HEADER_FORMAT)
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE

COMPRESSION_NONE = 0
SUPPORTED_BIT_COUNTS = (24, 32)


@dataclass(frozen=True)
class FileHeader:
    signature: bytes
    file_size: int
    reserved1: int
    reserved2: int
    pixel_data_offset: int

    @classmethod
    def unpack(cls, data: bytes) -> "FileHeader":
        """Decode the 14-byte file header."""
        if len(data) < FILE_HEADER_SIZE:
            raise FormatError("Not a recognized bitmap: truncated file header")
        return cls(*struct.unpack_from(FILE_HEADER_FORMAT, data))

    def pack(self) -> bytes:
        """Encode the 14-byte file header."""
        return struct.pack(
            FILE_HEADER_FORMAT,
            self.signature,
            self.file_size,
            self.reserved1,
            self.reserved2,
            self.pixel_data_offset,
        )


@dataclass(frozen=True)
class InfoHeader:
    header_size: int
    width: int
    height: int
    planes: int
    bit_count: int
    compression: int
    image_size: int
    x_resolution: int = 0
    y_resolution: int = 0
    colors_used: int = 0
    colors_important: int = 0

    @classmethod
    def unpack(cls, data: bytes) -> "InfoHeader":
        """Decode the 40-byte info header."""
        if len(data) < INFO_HEADER_SIZE:
            raise FormatError("Truncated info header")
        return cls(*struct.unpack_from(INFO_HEADER_FORMAT, data))

    def pack(self) -> bytes:
        """Encode the 40-byte info header."""
        return struct.pack(
            INFO_HEADER_FORMAT,
            self.header_size,
            self.width,
            self.height,
            self.planes,
            self.bit_count,
            self.compression,
            self.image_size,
            self.x_resolution,
            self.y_resolution,
            self.colors_used,
            self.colors_important,
        )

    @property
    def bytes_per_pixel(self) -> int:
        return self.bit_count // 8


def row_stride(bit_count: int, width: int) -> int:
    """Return the on-disk row size in bytes, padded to a 4-byte boundary."""
    return ((bit_count * width + 31) // 32) * 4


def check_signature(file_header: FileHeader) -> None:
    if file_header.signature != SIGNATURE:
        raise FormatError("Not a recognized bitmap")


def validate_headers(file_header: FileHeader, info: InfoHeader) -> None:
    """Reject info headers the codec cannot decode.

    The signature is checked separately, before the info header is read.
    """
    if info.header_size < INFO_HEADER_SIZE:
        raise FormatError(f"Unsupported info header size: {info.header_size}")
    if info.bit_count not in SUPPORTED_BIT_COUNTS:
        raise FormatError(f"Only 24 or 32-bit bitmaps supported, got {info.bit_count}")
    if info.compression != COMPRESSION_NONE:
        raise FormatError(f"Compressed bitmaps not supported (compression={info.compression})")
    if info.width <= 0 or info.height <= 0:
        raise FormatError(f"Invalid dimensions: {info.width}x{info.height}")
    if file_header.pixel_data_offset < FILE_HEADER_SIZE + info.header_size:
        raise FormatError(f"Pixel data offset {file_header.pixel_data_offset} overlaps the headers")
