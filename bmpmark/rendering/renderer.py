from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from ..bitmap.types import PixelBuffer, Rgba

BLACK_GLYPH = "#"
WHITE_GLYPH = " "
OTHER_GLYPH = "?"


def glyph_for(sample: Rgba) -> str:
    if sample.is_black:
        return BLACK_GLYPH
    if sample.is_white:
        return WHITE_GLYPH
    return OTHER_GLYPH


def render_lines(buffer: PixelBuffer) -> List[str]:
    return ["".join(glyph_for(sample) for sample in row) for row in buffer.rows()]


def render_text(buffer: PixelBuffer) -> str:
    return "".join(line + "\n" for line in render_lines(buffer))


def print_buffer(buffer: PixelBuffer, stream: Optional[TextIO] = None) -> None:
    (stream or sys.stdout).write(render_text(buffer))
