from __future__ import annotations

import os
from typing import Dict, Optional, Set

from ...bitmap.types import PixelBuffer
from .base import BufferConverter, buffer_to_image, image_to_buffer, save_preview
from .bitmap import BitmapConverter
from .image import ImageConverter

SUPPORTED_EXTENSIONS: Set[str] = {".bmp", ".png", ".jpg", ".jpeg", ".gif"}


class BufferLoader:
    def __init__(
        self,
        converters: Optional[Dict[str, BufferConverter]] = None,
        fallback: Optional[BufferConverter] = None,
    ) -> None:
        if converters is None:
            converters = {".bmp": BitmapConverter()}
            image_converter = ImageConverter()
            for ext in (".png", ".jpg", ".jpeg", ".gif"):
                converters[ext] = image_converter
        self._converters = converters
        self._fallback = fallback or BitmapConverter()

    @property
    def supported_extensions(self) -> Set[str]:
        return set(self._converters.keys())

    def load(self, path: str) -> PixelBuffer:
        ext = os.path.splitext(path)[1].lower()
        converter = self._converters.get(ext, self._fallback)
        return converter.load(path)


def load_buffer(path: str) -> PixelBuffer:
    return BufferLoader().load(path)


__all__ = [
    "BitmapConverter",
    "BufferConverter",
    "BufferLoader",
    "buffer_to_image",
    "ImageConverter",
    "image_to_buffer",
    "load_buffer",
    "save_preview",
    "SUPPORTED_EXTENSIONS",
]
