from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .bitmap import codec
from .bitmap.types import PixelBuffer, Rgba
from .drawing import MARK_SIZE, centered_origin, draw_x
from .errors import ContentPolicyError
from .rendering.converters import load_buffer, save_preview

LOGGER = logging.getLogger(__name__)


def is_valid_color(sample: Rgba) -> bool:
    return sample.is_black or sample.is_white


def find_invalid_pixel(buffer: PixelBuffer) -> Optional[Tuple[int, int, Rgba]]:
    """Return the first pixel, in row-major order, that is neither black nor white."""
    for index, sample in enumerate(buffer.samples):
        if not is_valid_color(sample):
            y, x = divmod(index, buffer.width)
            return x, y, sample
    return None


def ensure_black_and_white(buffer: PixelBuffer) -> None:
    found = find_invalid_pixel(buffer)
    if found is not None:
        raise ContentPolicyError(*found)


@dataclass
class MarkSettings:
    mark_size: int = MARK_SIZE
    origin: Optional[Tuple[int, int]] = None
    strict_colors: bool = True
    preview: bool = True
    preview_image: Optional[str] = None


class MarkJob:
    def __init__(self, settings: Optional[MarkSettings] = None) -> None:
        self.settings = settings or MarkSettings()

    def load(self, path: str) -> PixelBuffer:
        buffer = load_buffer(path)
        LOGGER.debug("loaded %s (%dx%d)", path, buffer.width, buffer.height)
        return buffer

    def check(self, buffer: PixelBuffer) -> None:
        if self.settings.strict_colors:
            ensure_black_and_white(buffer)

    def origin_for(self, buffer: PixelBuffer) -> Tuple[int, int]:
        if self.settings.origin is not None:
            return self.settings.origin
        return centered_origin(buffer.width, buffer.height, self.settings.mark_size)

    def apply(self, buffer: PixelBuffer) -> Tuple[int, int]:
        """Draw the mark into ``buffer`` and return the origin used."""
        origin_x, origin_y = self.origin_for(buffer)
        LOGGER.debug("drawing %d-pixel mark at (%d, %d)", self.settings.mark_size, origin_x, origin_y)
        draw_x(buffer, origin_x, origin_y, self.settings.mark_size)
        return origin_x, origin_y

    def save(self, path: Optional[str], buffer: PixelBuffer) -> None:
        """Write the bitmap to ``path`` (unless None) and the optional Pillow preview."""
        if path is not None:
            codec.save(path, buffer)
        if self.settings.preview_image:
            save_preview(buffer, self.settings.preview_image)
