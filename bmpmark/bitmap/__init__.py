from .codec import (
    SAVE_BIT_COUNT,
    BitmapInfo,
    encode_bitmap,
    load,
    read_bitmap,
    read_headers,
    read_info,
    save,
    write_bitmap,
)
from .headers import (
    FILE_HEADER_SIZE,
    INFO_HEADER_SIZE,
    PIXEL_DATA_OFFSET,
    SIGNATURE,
    SUPPORTED_BIT_COUNTS,
    FileHeader,
    InfoHeader,
    row_stride,
)
from .types import BLACK, WHITE, PixelBuffer, Rgba

__all__ = [
    "BitmapInfo",
    "BLACK",
    "encode_bitmap",
    "FILE_HEADER_SIZE",
    "FileHeader",
    "INFO_HEADER_SIZE",
    "InfoHeader",
    "load",
    "PIXEL_DATA_OFFSET",
    "PixelBuffer",
    "read_bitmap",
    "read_headers",
    "read_info",
    "Rgba",
    "row_stride",
    "save",
    "SAVE_BIT_COUNT",
    "SIGNATURE",
    "SUPPORTED_BIT_COUNTS",
    "WHITE",
    "write_bitmap",
]
