class BBoxError(ValueError):
    """Base exception for rejected bounding boxes."""


class BBoxShapeError(BBoxError):
    """Raised when a box does not have exactly four coordinates."""


class BBoxRangeError(BBoxError):
    """Raised when a normalized coordinate is not a number in [0, 1]."""


class BBoxOrderError(BBoxError):
    """Raised when a box has x2 <= x1 or y2 <= y1."""
