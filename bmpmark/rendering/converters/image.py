from __future__ import annotations

import logging

from PIL import Image, UnidentifiedImageError

from ...bitmap.types import PixelBuffer
from ...errors import FormatError
from .base import RasterConverter, image_to_buffer

LOGGER = logging.getLogger(__name__)


class ImageConverter(RasterConverter):
    def load(self, path: str) -> PixelBuffer:
        try:
            img = self._load_image(path)
        except UnidentifiedImageError as exc:
            raise FormatError(f"Not a recognized image: {path}") from exc
        except Image.DecompressionBombError as exc:
            raise FormatError(f"Image too large: {path}") from exc
        LOGGER.debug("loaded %s via Pillow (%s, %dx%d)", path, img.mode, img.width, img.height)
        return image_to_buffer(img)
