from .bitmap import PixelBuffer, Rgba, load, save
from .drawing import draw_x
from .errors import BitmapError, ContentPolicyError, FormatError
from .rendering import render_text

__all__ = [
    "BitmapError",
    "ContentPolicyError",
    "draw_x",
    "FormatError",
    "load",
    "PixelBuffer",
    "render_text",
    "Rgba",
    "save",
]
