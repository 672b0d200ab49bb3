from __future__ import annotations

from typing import Iterator, Tuple

from ..bitmap.types import WHITE, PixelBuffer, Rgba


def line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[Tuple[int, int]]:
    """Yield the integer Bresenham points from (x0, y0) to (x1, y1), inclusive."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    x, y = x0, y0
    while True:
        yield x, y
        if x == x1 and y == y1:
            return
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def plot_line(buffer: PixelBuffer, x0: int, y0: int, x1: int, y1: int, color: Rgba = WHITE) -> None:
    """Set every in-bounds point of the line to ``color``, in place.

    Points outside the buffer are skipped.
    """
    for x, y in line_points(x0, y0, x1, y1):
        if buffer.contains(x, y):
            buffer.samples[y * buffer.width + x] = color
