"""Tile world generation core."""

from .exceptions import MapFormatError, PlacementError, TileWorldError
from .sinks import (
    LineRecorder,
    LineSink,
    PlacementRecorder,
    PlacementSink,
    TileRecorder,
    TileSink,
)
from .tile_variants import TileVariant, value_to_variant, variant_value
from .types import Color, GridPosition, Point, Rect, lerp

__all__ = [
    # Types
    "Color",
    "GridPosition",
    "Point",
    "Rect",
    "lerp",
    # Tiles
    "TileVariant",
    "variant_value",
    "value_to_variant",
    # Sinks
    "TileSink",
    "LineSink",
    "PlacementSink",
    "TileRecorder",
    "LineRecorder",
    "PlacementRecorder",
    # Exceptions
    "TileWorldError",
    "PlacementError",
    "MapFormatError",
]
