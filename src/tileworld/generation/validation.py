"""Post-generation validation of maps and placements."""

import numpy as np
import structlog
from scipy import ndimage

from ..tile_variants import TileVariant, variant_value
from .generator import GenerationResult

logger = structlog.get_logger()

# Tolerance for floating point distance comparisons
_DISTANCE_EPSILON = 1e-9


class ValidationResult:
    """Result of map validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.road_components = 0
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_map(result: GenerationResult) -> ValidationResult:
    """Check a generated map against its invariants.

    Args:
        result: Generation result to check.

    Returns:
        ValidationResult with any errors/warnings.
    """
    validation = ValidationResult()

    _check_background_matches_mask(result, validation)
    _check_unclassified_roads(result, validation)
    _check_tree_positions(result, validation)
    _count_road_components(result, validation)

    if validation.passed:
        logger.info(
            "validation_passed",
            warnings=len(validation.warnings),
            road_components=validation.road_components,
        )
    else:
        logger.warning("validation_failed", errors=validation.errors)

    for warning in validation.warnings:
        logger.warning("validation_warning", message=warning)

    return validation


def _check_background_matches_mask(
    result: GenerationResult, validation: ValidationResult
) -> None:
    """Non-road cells must be Background."""
    background = variant_value(TileVariant.BACKGROUND)
    off_road_tiles = (~result.road_mask) & (result.variants != background)
    count = int(np.sum(off_road_tiles))
    if count > 0:
        validation.add_error(f"{count} non-road cells carry a road variant")


def _check_unclassified_roads(
    result: GenerationResult, validation: ValidationResult
) -> None:
    """Road cells with no variant are expected for isolated and edge cells."""
    unclassified = result.roads.unclassified_cells()
    if unclassified:
        validation.add_warning(
            f"{len(unclassified)} road cells left unclassified "
            f"(first: {unclassified[0]})"
        )


def _check_tree_positions(
    result: GenerationResult, validation: ValidationResult
) -> None:
    """Trees must be off-road and separated."""
    positions = result.tree_positions
    on_road = [p for p in positions if result.roads.is_road_at(p)]
    if on_road:
        validation.add_error(f"{len(on_road)} trees placed on road cells")

    if len(positions) < 2:
        return

    min_distance = result.config.placement.min_tree_distance
    coords = np.array([(p.x, p.y) for p in positions], dtype=np.float64)
    diffs = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
    distances = np.hypot(diffs[..., 0], diffs[..., 1])
    np.fill_diagonal(distances, np.inf)

    closest = float(distances.min())
    if closest < min_distance - _DISTANCE_EPSILON:
        validation.add_error(
            f"Trees {closest:.3f} apart, minimum is {min_distance:.3f}"
        )


def _count_road_components(
    result: GenerationResult, validation: ValidationResult
) -> None:
    """Record the number of 4-connected road networks."""
    if result.road_mask.size == 0:
        return
    _, num_components = ndimage.label(result.road_mask)
    validation.road_components = int(num_components)
    if num_components > 1:
        validation.add_warning(f"Road network split into {num_components} components")
