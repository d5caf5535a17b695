"""Rejection sampling of separated placements."""

from collections.abc import Callable

import numpy as np
import structlog

from ..exceptions import PlacementError
from ..sinks import PlacementSink
from ..types import GridPosition, Point, Rect

logger = structlog.get_logger()

ExcludePredicate = Callable[[Point], bool]


def is_separated(
    candidate: Point,
    accepted: tuple[Point, ...],
    min_distance: float,
) -> bool:
    """Whether candidate is at least min_distance from every accepted point."""
    if not accepted:
        return True
    coords = np.array([(p.x, p.y) for p in accepted], dtype=np.float64)
    distances = np.hypot(coords[:, 0] - candidate.x, coords[:, 1] - candidate.y)
    return bool(np.all(distances >= min_distance))


def try_accept(
    candidate: Point,
    accepted: tuple[Point, ...],
    exclude: ExcludePredicate,
    min_distance: float,
) -> tuple[Point, ...]:
    """Return the accepted set, extended by candidate if it passes both tests.

    The distance test is against every accepted point, so a full run costs
    O(n^2) comparisons.
    """
    if exclude(candidate):
        return accepted
    if not is_separated(candidate, accepted, min_distance):
        return accepted
    return accepted + (candidate,)


class PlacementSampler:
    """Scatters points subject to exclusion and minimum separation.

    Without max_attempts the sampler retries until it has `count` points.
    If the constraints leave too little room it never returns, so callers
    must pass feasible parameters or set a ceiling.
    """

    def __init__(self, rng: np.random.Generator, max_attempts: int | None = None):
        self.rng = rng
        self.max_attempts = max_attempts

    def sample(
        self,
        count: int,
        bounds: Rect,
        exclude: ExcludePredicate,
        min_distance: float,
    ) -> list[Point]:
        """Sample points uniformly inside bounds.

        Args:
            count: Number of points to accept.
            bounds: Sampling rectangle.
            exclude: Predicate rejecting candidates (e.g. "on a road").
            min_distance: Required distance between accepted points.

        Returns:
            Exactly `count` accepted points in acceptance order.

        Raises:
            PlacementError: If max_attempts draws do not yield `count` points.
        """

        def draw() -> Point:
            return Point(
                x=float(self.rng.uniform(bounds.x_min, bounds.x_max)),
                y=float(self.rng.uniform(bounds.y_min, bounds.y_max)),
            )

        return self._collect(count, draw, exclude, min_distance)

    def sample_cells(
        self,
        count: int,
        width: int,
        height: int,
        exclude: ExcludePredicate,
        min_distance: float,
    ) -> list[Point]:
        """Sample cell centres strictly inside the grid border.

        Candidates are integer cells with 1 <= x < width - 1 and
        1 <= y < height - 1, converted to the world point at the cell centre.

        Raises:
            PlacementError: If the grid has no interior cells, or if
                max_attempts draws do not yield `count` points.
        """
        if count <= 0:
            return []
        if width <= 2 or height <= 2:
            raise PlacementError(
                f"Grid {width}x{height} has no interior cells",
                requested=count,
            )

        def draw() -> Point:
            cell = GridPosition(
                x=int(self.rng.integers(1, width - 1)),
                y=int(self.rng.integers(1, height - 1)),
            )
            return cell.center()

        return self._collect(count, draw, exclude, min_distance)

    def _collect(
        self,
        count: int,
        draw: Callable[[], Point],
        exclude: ExcludePredicate,
        min_distance: float,
    ) -> list[Point]:
        accepted: tuple[Point, ...] = ()
        attempts = 0

        while len(accepted) < count:
            if self.max_attempts is not None and attempts >= self.max_attempts:
                logger.warning(
                    "placement_exhausted",
                    requested=count,
                    accepted=len(accepted),
                    attempts=attempts,
                )
                raise PlacementError(
                    f"Placed {len(accepted)} of {count} points "
                    f"after {attempts} attempts",
                    requested=count,
                    accepted=len(accepted),
                    attempts=attempts,
                )
            attempts += 1
            accepted = try_accept(draw(), accepted, exclude, min_distance)

        logger.debug("placement_complete", accepted=len(accepted), attempts=attempts)
        return list(accepted)


def emit_placements(points: list[Point], sink: PlacementSink) -> None:
    """Forward accepted placements to a sink."""
    for point in points:
        sink.place(point)
