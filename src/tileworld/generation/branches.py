"""Recursive stochastic branch generation for fractal trees."""

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import structlog

from ..sinks import LineSink
from ..types import Color, Point, lerp
from .config import TreeConfig

logger = structlog.get_logger()

# Above this depth fan-out gets expensive for interactive use
DEPTH_WARNING_THRESHOLD = 8


@dataclass(frozen=True)
class Segment:
    """One branch of a fractal tree."""

    start: Point
    end: Point
    depth: int
    width: float
    end_width: float
    color: Color

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


def max_segment_count(max_depth: int, max_branches: int = 4) -> int:
    """Upper bound on segments emitted for a tree of the given depth."""
    return sum(max_branches**level for level in range(max(max_depth, 0)))


class BranchGenerator:
    """Generates fractal trees as flat, depth-first segment sequences.

    Each call to a non-zero depth emits one segment, then spawns between
    min_branches and max_branches children with jittered angle and shrinking
    length. Depth 0 emits nothing.
    """

    def __init__(self, config: TreeConfig, rng: np.random.Generator):
        self.config = config
        self.rng = rng

        if config.max_depth > DEPTH_WARNING_THRESHOLD:
            logger.warning(
                "deep_tree_configured",
                max_depth=config.max_depth,
                max_segments=max_segment_count(config.max_depth, config.max_branches),
            )

    def generate_tree(self, origin: Point) -> list[Segment]:
        """Generate a full tree rooted at origin using configured trunk values."""
        return self.generate(
            origin,
            self.config.branch_length,
            self.config.initial_angle,
            self.config.max_depth,
        )

    def generate(
        self,
        origin: Point,
        length: float,
        angle: float,
        depth: int,
    ) -> list[Segment]:
        """Generate a branch and all its descendants.

        Args:
            origin: Start point of the branch.
            length: Branch length.
            angle: Branch direction in degrees.
            depth: Remaining recursion depth.

        Returns:
            Segments in emission order: this branch first, then each child
            subtree in turn.
        """
        return list(self.iter_segments(origin, length, angle, depth))

    def iter_segments(
        self,
        origin: Point,
        length: float,
        angle: float,
        depth: int,
    ) -> Iterator[Segment]:
        """Lazily yield segments in the same order as generate()."""
        if depth <= 0:
            return

        end = origin.polar(length, angle)
        yield self._make_segment(origin, end, depth)

        branch_count = int(
            self.rng.integers(self.config.min_branches, self.config.max_branches + 1)
        )
        for _ in range(branch_count):
            new_angle = angle + self.rng.uniform(
                -self.config.angle_variance, self.config.angle_variance
            )
            new_length = (length * self.config.length_multiplier) * self.rng.uniform(
                0.7, 1.2
            )
            yield from self.iter_segments(end, new_length, new_angle, depth - 1)

    def _make_segment(self, start: Point, end: Point, depth: int) -> Segment:
        """Build a segment with depth-interpolated width and colour."""
        config = self.config
        t = depth / config.max_depth if config.max_depth > 0 else 1.0
        width = max(lerp(config.end_width, config.start_width, t), config.min_width)
        color = config.end_color.lerp(config.start_color, t)
        return Segment(
            start=start,
            end=end,
            depth=depth,
            width=width,
            end_width=width * 0.5,
            color=color,
        )


def emit_segments(segments: list[Segment], sink: LineSink) -> None:
    """Forward segments to a line sink in order."""
    for segment in segments:
        sink.draw_segment(
            segment.start,
            segment.end,
            segment.width,
            segment.end_width,
            segment.color,
            segment.color,
        )
