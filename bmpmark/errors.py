from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .bitmap.types import Rgba


class BitmapError(Exception):
    pass


class FormatError(BitmapError, ValueError):
    """Raised when a file is not a bitmap this package can decode."""


class ContentPolicyError(BitmapError):
    """Raised when a pixel is neither pure black nor pure white."""

    def __init__(self, x: int, y: int, sample: "Rgba") -> None:
        super().__init__(
            f"Image contains colors other than black and white: "
            f"pixel ({x}, {y}) is ({sample.red}, {sample.green}, {sample.blue})"
        )
        self.x = x
        self.y = y
        self.sample = sample
