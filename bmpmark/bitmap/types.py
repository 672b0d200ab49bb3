from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List


@dataclass(frozen=True)
class Rgba:
    """One 8-bit-per-channel color sample."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for value in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= value <= 255:
                raise ValueError(f"Channel value out of range: {value}")

    @property
    def is_black(self) -> bool:
        return self.red == 0 and self.green == 0 and self.blue == 0

    @property
    def is_white(self) -> bool:
        return self.red == 255 and self.green == 255 and self.blue == 255


BLACK = Rgba(0, 0, 0)
WHITE = Rgba(255, 255, 255)


@dataclass
class PixelBuffer:
    """Row-major RGBA pixel buffer, top row first."""

    width: int
    height: int
    samples: List[Rgba] = field(repr=False)

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def create(cls, width: int, height: int, fill: Rgba = BLACK) -> "PixelBuffer":
        return cls(width, height, [fill] * (width * height))

    def validate(self) -> None:
        """Validate dimensions against the sample count."""
        if self.width <= 0:
            raise ValueError("Width must be greater than zero")
        if self.height <= 0:
            raise ValueError("Height must be greater than zero")
        if len(self.samples) != self.width * self.height:
            raise ValueError("Samples length must equal width * height")

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Rgba:
        self._check_bounds(x, y)
        return self.samples[y * self.width + x]

    def set(self, x: int, y: int, color: Rgba) -> None:
        self._check_bounds(x, y)
        self.samples[y * self.width + x] = color

    def row(self, y: int) -> List[Rgba]:
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} outside 0..{self.height - 1}")
        start = y * self.width
        return self.samples[start : start + self.width]

    def rows(self) -> Iterator[List[Rgba]]:
        for y in range(self.height):
            yield self.row(y)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, list(self.samples))

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
