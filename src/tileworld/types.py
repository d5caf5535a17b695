"""Core geometric types shared by the generators."""

import math

from pydantic import BaseModel, model_validator


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation with t clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return a + (b - a) * t


class GridPosition(BaseModel, frozen=True):
    """Immutable integer tile coordinate.

    Coordinate system: +X is right, +Y is up.
    """

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "GridPosition":
        """Return new position shifted by (dx, dy)."""
        return GridPosition(x=self.x + dx, y=self.y + dy)

    def center(self) -> "Point":
        """World-space point at the centre of this cell."""
        return Point(x=self.x + 0.5, y=self.y + 0.5)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"GridPosition(x={self.x}, y={self.y})"


class Point(BaseModel, frozen=True):
    """Immutable 2D world-space point."""

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(x=self.x + other.x, y=self.y + other.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def polar(self, length: float, angle_degrees: float) -> "Point":
        """Return the point `length` away along `angle_degrees`."""
        radians = math.radians(angle_degrees)
        return Point(
            x=self.x + math.cos(radians) * length,
            y=self.y + math.sin(radians) * length,
        )

    def cell(self) -> GridPosition:
        """Grid cell containing this point."""
        return GridPosition(x=math.floor(self.x), y=math.floor(self.y))

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"


class Rect(BaseModel, frozen=True):
    """Axis-aligned rectangle, half-open on the max edges."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @model_validator(mode="after")
    def check_extent(self) -> "Rect":
        if self.x_max < self.x_min or self.y_max < self.y_min:
            raise ValueError(
                f"Rect max corner ({self.x_max}, {self.y_max}) "
                f"is below min corner ({self.x_min}, {self.y_min})"
            )
        return self

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, point: Point) -> bool:
        """Whether the point lies inside the rectangle."""
        return (
            self.x_min <= point.x < self.x_max
            and self.y_min <= point.y < self.y_max
        )


class Color(BaseModel, frozen=True):
    """RGB colour with float components, nominally in [0, 1]."""

    r: float
    g: float
    b: float

    def lerp(self, other: "Color", t: float) -> "Color":
        """Component-wise interpolation from self to other."""
        return Color(
            r=lerp(self.r, other.r, t),
            g=lerp(self.g, other.g, t),
            b=lerp(self.b, other.b, t),
        )

    def to_rgb8(self) -> tuple[int, int, int]:
        """Convert to 8-bit RGB, clamping out-of-range components."""
        return tuple(  # type: ignore[return-value]
            int(round(max(0.0, min(1.0, c)) * 255)) for c in (self.r, self.g, self.b)
        )

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)
