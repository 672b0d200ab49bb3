from __future__ import annotations

from typing import Set, Tuple

from ..bitmap.types import WHITE, PixelBuffer, Rgba
from .lines import line_points, plot_line

MARK_SIZE = 10


def _diagonals(origin_x: int, origin_y: int, size: int):
    if size < 0:
        raise ValueError("Mark size must not be negative")
    return (
        (origin_x, origin_y, origin_x + size, origin_y + size),
        (origin_x, origin_y + size, origin_x + size, origin_y),
    )


def draw_x(
    buffer: PixelBuffer,
    origin_x: int,
    origin_y: int,
    size: int = MARK_SIZE,
    color: Rgba = WHITE,
) -> None:
    """Draw an X whose bounding box starts at (origin_x, origin_y).

    Mutates ``buffer`` in place; parts of the mark outside the buffer are clipped.
    """
    for segment in _diagonals(origin_x, origin_y, size):
        plot_line(buffer, *segment, color=color)


def mark_points(origin_x: int, origin_y: int, size: int = MARK_SIZE) -> Set[Tuple[int, int]]:
    """Return every point the X covers, before clipping."""
    points: Set[Tuple[int, int]] = set()
    for segment in _diagonals(origin_x, origin_y, size):
        points.update(line_points(*segment))
    return points


def centered_origin(width: int, height: int, size: int = MARK_SIZE) -> Tuple[int, int]:
    return width // 2 - size // 2, height // 2 - size // 2
