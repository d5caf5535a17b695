"""Road mask generation and neighbourhood-based tile classification."""

from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage

from ..sinks import TileSink
from ..tile_variants import TileVariant, value_to_variant, variant_value
from ..types import GridPosition, Point
from .config import RoadConfig
from .noise import NoiseField

logger = structlog.get_logger()

# Neighbour pattern (left, right, up, down) -> variant.
# Legacy mapping: two corner patterns resolve to straight pieces
# (left+up -> horizontal, right+down -> vertical).
ROAD_VARIANT_TABLE: dict[tuple[bool, bool, bool, bool], TileVariant] = {
    (True, True, True, True): TileVariant.CROSS_INTERSECTION,
    (True, True, True, False): TileVariant.T_INTERSECTION,
    (True, True, False, True): TileVariant.VERTICAL_ROAD,
    (True, False, True, True): TileVariant.HORIZONTAL_ROAD,
    (False, True, True, True): TileVariant.HORIZONTAL_ROAD,
    (True, False, True, False): TileVariant.HORIZONTAL_ROAD,
    (False, True, True, False): TileVariant.CORNER_UR,
    (True, False, False, True): TileVariant.CORNER_DL,
    (False, True, False, True): TileVariant.VERTICAL_ROAD,
    (True, True, False, False): TileVariant.HORIZONTAL_ROAD,
    (False, False, True, True): TileVariant.VERTICAL_ROAD,
}

# 4-connected neighbour kernel
_CROSS = np.array([[0, 1, 0], [1, 0, 1], [0, 1, 0]], dtype=np.int32)


def road_mask(
    width: int,
    height: int,
    seed: int,
    noise_scale: float,
    threshold: float = 0.5,
    field: NoiseField | None = None,
) -> NDArray[np.bool_]:
    """Threshold the noise field into a road mask.

    Args:
        width: Grid width.
        height: Grid height.
        seed: Offset added to cell coordinates before sampling.
        noise_scale: Noise frequency per cell.
        threshold: Cells strictly above this value are road.
        field: Noise field to sample (default: a fresh NoiseField).

    Returns:
        Boolean array of shape (height, width), True = road.
    """
    field = field or NoiseField()
    values = field.sample_grid(width, height, seed, noise_scale)
    return values > threshold


def neighbor_masks(
    mask: NDArray[np.bool_],
) -> tuple[NDArray[np.bool_], NDArray[np.bool_], NDArray[np.bool_], NDArray[np.bool_]]:
    """Road flags of the left, right, up and down neighbour of every cell.

    Out-of-bounds neighbours count as non-road. Up is +Y (row y + 1).
    """
    padded = np.pad(mask, 1, mode="constant", constant_values=False)
    left = padded[1:-1, :-2]
    right = padded[1:-1, 2:]
    up = padded[2:, 1:-1]
    down = padded[:-2, 1:-1]
    return left, right, up, down


def neighbor_pattern(
    mask: NDArray[np.bool_], x: int, y: int
) -> tuple[bool, bool, bool, bool]:
    """(left, right, up, down) road flags around a single cell."""
    return (
        _is_road(mask, x - 1, y),
        _is_road(mask, x + 1, y),
        _is_road(mask, x, y + 1),
        _is_road(mask, x, y - 1),
    )


def _is_road(mask: NDArray[np.bool_], x: int, y: int) -> bool:
    height, width = mask.shape
    if x < 0 or y < 0 or x >= width or y >= height:
        return False
    return bool(mask[y, x])


def classify_roads(
    mask: NDArray[np.bool_],
    sink: TileSink | None = None,
) -> NDArray[np.uint8]:
    """Primary pass: assign a variant to every road cell from its neighbours.

    Road cells whose pattern is not in the table (isolated cells and dead
    ends) stay Background here; the smoothing pass picks up interior ones.

    Args:
        mask: Road mask of shape (height, width).
        sink: Optional sink receiving one write per classified cell.

    Returns:
        uint8 variant grid of shape (height, width).
    """
    height, width = mask.shape
    variants = np.full(
        (height, width), variant_value(TileVariant.BACKGROUND), dtype=np.uint8
    )
    left, right, up, down = neighbor_masks(mask)

    for x in range(width):
        for y in range(height):
            if not mask[y, x]:
                continue
            pattern = (
                bool(left[y, x]),
                bool(right[y, x]),
                bool(up[y, x]),
                bool(down[y, x]),
            )
            variant = ROAD_VARIANT_TABLE.get(pattern)
            if variant is None:
                continue
            variants[y, x] = variant_value(variant)
            if sink is not None:
                sink.set_tile(GridPosition(x=x, y=y), variant)

    return variants


def smooth_roads(
    mask: NDArray[np.bool_],
    variants: NDArray[np.uint8],
    sink: TileSink | None = None,
) -> NDArray[np.uint8]:
    """Smoothing pass: straighten interior dead ends.

    An interior road cell with exactly one road neighbour becomes a
    horizontal piece if that neighbour is left or right, vertical if it is
    up or down. Must run after classify_roads has covered the whole grid.

    Args:
        mask: Road mask of shape (height, width).
        variants: Output of classify_roads.
        sink: Optional sink receiving one write per reassigned cell.

    Returns:
        New uint8 variant grid.
    """
    smoothed = variants.copy()
    height, width = mask.shape
    if width <= 2 or height <= 2:
        return smoothed

    counts = ndimage.convolve(
        mask.astype(np.int32), _CROSS, mode="constant", cval=0
    )
    left, right, _, _ = neighbor_masks(mask)

    for x in range(1, width - 1):
        for y in range(1, height - 1):
            if not mask[y, x] or counts[y, x] != 1:
                continue
            if left[y, x] or right[y, x]:
                variant = TileVariant.HORIZONTAL_ROAD
            else:
                variant = TileVariant.VERTICAL_ROAD
            smoothed[y, x] = variant_value(variant)
            if sink is not None:
                sink.set_tile(GridPosition(x=x, y=y), variant)

    return smoothed


@dataclass(frozen=True, eq=False)
class RoadGrid:
    """Classified road network for one generation pass."""

    mask: NDArray[np.bool_]
    variants: NDArray[np.uint8]
    seed: int

    @property
    def width(self) -> int:
        return self.mask.shape[1]

    @property
    def height(self) -> int:
        return self.mask.shape[0]

    def is_road(self, x: int, y: int) -> bool:
        """Road predicate; out-of-bounds cells are never road."""
        return _is_road(self.mask, x, y)

    def is_road_at(self, point: Point) -> bool:
        """Road predicate for the cell containing a world-space point."""
        cell = point.cell()
        return self.is_road(cell.x, cell.y)

    def variant_at(self, x: int, y: int) -> TileVariant:
        return value_to_variant(self.variants[y, x])

    def road_cell_count(self) -> int:
        return int(np.sum(self.mask))

    def unclassified_cells(self) -> list[GridPosition]:
        """Road cells left as Background by both passes."""
        background = variant_value(TileVariant.BACKGROUND)
        ys, xs = np.where(self.mask & (self.variants == background))
        return [GridPosition(x=int(x), y=int(y)) for x, y in zip(xs, ys)]


class RoadClassifier:
    """Builds a RoadGrid from noise for a given seed."""

    def __init__(self, config: RoadConfig, field: NoiseField | None = None):
        self.config = config
        self.field = field or NoiseField()

    def classify(self, seed: int, sink: TileSink | None = None) -> RoadGrid:
        """Run both classification passes.

        Args:
            seed: Noise seed offset for this run.
            sink: Optional tile sink receiving primary writes followed by
                smoothing overwrites.

        Returns:
            The classified RoadGrid.
        """
        mask = road_mask(
            self.config.width,
            self.config.height,
            seed,
            self.config.noise_scale,
            threshold=self.config.threshold,
            field=self.field,
        )
        variants = classify_roads(mask, sink)
        variants = smooth_roads(mask, variants, sink)

        grid = RoadGrid(mask=mask, variants=variants, seed=seed)
        logger.debug(
            "roads_classified",
            seed=seed,
            width=grid.width,
            height=grid.height,
            road_cells=grid.road_cell_count(),
        )
        return grid
