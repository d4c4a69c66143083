from dataclasses import dataclass


@dataclass(frozen=True)
class PageFrame:
    """Rendered size of one page, in pixels at the given scale."""

    page: int
    width: float
    height: float
    scale: float = 1.0

    def to_dict(self) -> dict[str, float]:
        return {
            "page": self.page,
            "width": self.width,
            "height": self.height,
            "scale": self.scale,
        }
