from __future__ import annotations

from ...bitmap import codec
from ...bitmap.types import PixelBuffer
from .base import BufferConverter


class BitmapConverter(BufferConverter):
    def load(self, path: str) -> PixelBuffer:
        return codec.load(path)
