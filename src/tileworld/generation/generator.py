"""Main generation orchestration."""

from dataclasses import dataclass

import numpy as np
import structlog

from ..sinks import LineSink, PlacementSink, TileSink
from ..tile_variants import TileVariant, value_to_variant
from ..types import GridPosition, Point
from .branches import BranchGenerator, Segment, emit_segments
from .config import GenerationConfig
from .noise import NoiseField
from .placement import PlacementSampler, emit_placements
from .roads import RoadClassifier, RoadGrid

logger = structlog.get_logger()

# Noise seeds are rolled from [0, SEED_RANGE) when not configured
SEED_RANGE = 10000


@dataclass(frozen=True)
class Tree:
    """A placed fractal tree."""

    position: Point
    segments: list[Segment]


class GenerationResult:
    """Result of one generation pass."""

    def __init__(
        self,
        roads: RoadGrid,
        trees: list[Tree],
        config: GenerationConfig,
    ):
        self.roads = roads
        self.trees = trees
        self.config = config

    @property
    def seed(self) -> int:
        return self.roads.seed

    @property
    def variants(self) -> np.ndarray:
        return self.roads.variants

    @property
    def road_mask(self) -> np.ndarray:
        return self.roads.mask

    @property
    def tree_positions(self) -> list[Point]:
        return [tree.position for tree in self.trees]

    @property
    def segment_count(self) -> int:
        return sum(len(tree.segments) for tree in self.trees)


def resolve_seed(config: GenerationConfig, rng: np.random.Generator) -> int:
    """Configured noise seed, or a fresh one drawn from rng."""
    if config.seed is not None:
        return config.seed
    return int(rng.integers(0, SEED_RANGE))


def fill_background(width: int, height: int, sink: TileSink) -> None:
    """Write Background to every cell of the grid."""
    for x in range(width):
        for y in range(height):
            sink.set_tile(GridPosition(x=x, y=y), TileVariant.BACKGROUND)


def generate_map(
    config: GenerationConfig,
    rng: np.random.Generator | None = None,
    *,
    field: NoiseField | None = None,
    tile_sink: TileSink | None = None,
    line_sink: LineSink | None = None,
    placement_sink: PlacementSink | None = None,
) -> GenerationResult:
    """Generate roads, scatter trees off-road and grow each tree.

    Stages run in a fixed order: background fill, road classification and
    smoothing, tree placement, then branch generation per tree.

    Args:
        config: Generation configuration.
        rng: Random source for seeds, placement and branches
            (default: seeded from config.rng_seed).
        field: Noise field for roads (default: a fresh NoiseField).
        tile_sink: Receives background, road and smoothing writes.
        line_sink: Receives every branch segment.
        placement_sink: Receives every tree position.

    Returns:
        GenerationResult with the road grid and placed trees.

    Raises:
        PlacementError: If trees cannot be placed within the attempt ceiling.
    """
    rng = rng if rng is not None else np.random.default_rng(config.rng_seed)
    seed = resolve_seed(config, rng)
    road_config = config.roads

    logger.info(
        "generation_started",
        width=road_config.width,
        height=road_config.height,
        seed=seed,
    )

    # Stage A: background
    if tile_sink is not None:
        fill_background(road_config.width, road_config.height, tile_sink)

    # Stage B: roads
    roads = RoadClassifier(road_config, field=field).classify(seed, sink=tile_sink)
    _log_road_stats(roads)

    # Stage C: tree placement
    sampler = PlacementSampler(rng, max_attempts=config.placement.max_attempts)
    positions = sampler.sample_cells(
        config.placement.tree_count,
        road_config.width,
        road_config.height,
        roads.is_road_at,
        config.placement.min_tree_distance,
    )
    if placement_sink is not None:
        emit_placements(positions, placement_sink)

    # Stage D: branches
    branches = BranchGenerator(config.trees, rng)
    trees: list[Tree] = []
    for position in positions:
        segments = branches.generate_tree(position)
        if line_sink is not None:
            emit_segments(segments, line_sink)
        trees.append(Tree(position=position, segments=segments))

    result = GenerationResult(roads=roads, trees=trees, config=config)
    logger.info(
        "generation_complete",
        seed=seed,
        trees=len(trees),
        segments=result.segment_count,
    )
    return result


def _log_road_stats(roads: RoadGrid) -> None:
    """Log road variant counts."""
    total = roads.mask.size
    counts: dict[str, int] = {variant.value: 0 for variant in TileVariant}
    for value, count in zip(*np.unique(roads.variants, return_counts=True)):
        counts[value_to_variant(value).value] += int(count)

    logger.info(
        "roads_generated",
        tiles=total,
        road_cells=roads.road_cell_count(),
        unclassified=len(roads.unclassified_cells()),
        **counts,
    )
