"""Pixel and normalized rectangles and the transform between them.

A normalized rectangle expresses each corner as a fraction of the page frame it
was drawn on, so it stays valid whatever scale the page is rendered at later.
"""

import math
from dataclasses import dataclass
from typing import Any

from field_mapper.geometry.exceptions import (
    BBoxOrderError,
    BBoxRangeError,
    BBoxShapeError,
)

NORM_PRECISION = 6
MIN_BOX_SIZE_PX = 8.0


@dataclass(frozen=True)
class Point:
    """Mouse position in pixels, relative to the page overlay."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle as [x1, y1, x2, y2]."""

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    def as_list(self) -> list[float]:
        return [self.x1, self.y1, self.x2, self.y2]

    @classmethod
    def from_list(cls, values: list[float]) -> "Rect":
        if len(values) != 4:
            raise BBoxShapeError("box must be 4 numbers")
        x1, y1, x2, y2 = (float(v) for v in values)
        return cls(x1, y1, x2, y2)


def _require_frame(frame_width: float, frame_height: float) -> None:
    if frame_width <= 0 or frame_height <= 0:
        raise ValueError(
            f"Frame size must be positive, got {frame_width}x{frame_height}"
        )


def rect_from_drag(start: Point, end: Point) -> Rect:
    """Order a mouse-down / mouse-up pair into a top-left to bottom-right rect."""
    left = min(start.x, end.x)
    top = min(start.y, end.y)
    return Rect(left, top, left + abs(end.x - start.x), top + abs(end.y - start.y))


def is_degenerate(pixel_rect: Rect, min_size: float = MIN_BOX_SIZE_PX) -> bool:
    """True when the drawn box is too small in either axis to be intentional."""
    return pixel_rect.width < min_size or pixel_rect.height < min_size


def to_normalized(pixel_rect: Rect, frame_width: float, frame_height: float) -> Rect:
    _require_frame(frame_width, frame_height)
    return Rect(
        round(pixel_rect.x1 / frame_width, NORM_PRECISION),
        round(pixel_rect.y1 / frame_height, NORM_PRECISION),
        round(pixel_rect.x2 / frame_width, NORM_PRECISION),
        round(pixel_rect.y2 / frame_height, NORM_PRECISION),
    )


def from_normalized(norm_rect: Rect, frame_width: float, frame_height: float) -> Rect:
    _require_frame(frame_width, frame_height)
    return Rect(
        norm_rect.x1 * frame_width,
        norm_rect.y1 * frame_height,
        norm_rect.x2 * frame_width,
        norm_rect.y2 * frame_height,
    )


def as_number(value: Any) -> float | None:
    """Coerce a wire value to float; None for bools, NaN, infinities and non-numerics."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def check_normalized(values: list[Any]) -> Rect:
    """Build a normalized Rect, rejecting (never clamping) invalid input.

    Raises:
        BBoxShapeError: not exactly four values.
        BBoxRangeError: a value is not a number in [0, 1].
        BBoxOrderError: x2 <= x1 or y2 <= y1.
    """
    if len(values) != 4:
        raise BBoxShapeError("bbox_norm must be 4 numbers")
    numbers = [as_number(v) for v in values]
    if any(n is None or n < 0 or n > 1 for n in numbers):
        raise BBoxRangeError("bbox_norm values must be between 0 and 1")
    x1, y1, x2, y2 = numbers
    if x2 <= x1 or y2 <= y1:  # type: ignore[operator]
        raise BBoxOrderError("bbox_norm x2> x1 and y2 > y1 required")
    return Rect(x1, y1, x2, y2)  # type: ignore[arg-type]


def check_pixel(values: list[Any]) -> Rect:
    """Build a pixel Rect. Pixel space has no upper bound or ordering check.

    Raises:
        BBoxShapeError: not exactly four values.
        BBoxRangeError: a value is not numeric.
    """
    if len(values) != 4:
        raise BBoxShapeError("bbox_pixel must be 4 numbers")
    numbers = [as_number(v) for v in values]
    if any(n is None for n in numbers):
        raise BBoxRangeError("bbox_pixel values must be numbers")
    return Rect(*numbers)  # type: ignore[arg-type]
