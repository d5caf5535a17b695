"""Procedural generation package.

Implements gradient noise, noise-thresholded road networks classified into
tile variants, rejection-sampled tree placement, and recursive fractal
branch generation.
"""

from .branches import BranchGenerator, Segment
from .config import GenerationConfig, PlacementConfig, RoadConfig, TreeConfig
from .generator import GenerationResult, Tree, generate_map
from .noise import NoiseField
from .persistence import load_map, save_map
from .placement import PlacementSampler
from .roads import RoadClassifier, RoadGrid
from .validation import ValidationResult, validate_map

__all__ = [
    "BranchGenerator",
    "GenerationConfig",
    "GenerationResult",
    "NoiseField",
    "PlacementConfig",
    "PlacementSampler",
    "RoadClassifier",
    "RoadConfig",
    "RoadGrid",
    "Segment",
    "Tree",
    "TreeConfig",
    "ValidationResult",
    "generate_map",
    "load_map",
    "save_map",
    "validate_map",
]
