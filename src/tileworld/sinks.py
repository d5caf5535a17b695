"""Collaborator interfaces for hosts that render generated output.

The generators never draw anything themselves. A host application implements
these sinks on top of its tilemap, line renderer and prefab system and hands
them to :func:`tileworld.generation.generate_map`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .tile_variants import TileVariant
from .types import Color, GridPosition, Point


class TileSink(ABC):
    """Receives tile variant writes. Must tolerate repeated writes."""

    @abstractmethod
    def set_tile(self, position: GridPosition, variant: TileVariant) -> None:
        pass


class LineSink(ABC):
    """Receives branch segments in generation order."""

    @abstractmethod
    def draw_segment(
        self,
        start: Point,
        end: Point,
        start_width: float,
        end_width: float,
        start_color: Color,
        end_color: Color,
    ) -> None:
        pass


class PlacementSink(ABC):
    """Receives one call per accepted placement."""

    @abstractmethod
    def place(self, world_position: Point) -> None:
        pass


@dataclass
class TileRecorder(TileSink):
    """In-memory tile sink keeping the last write per cell."""

    tiles: dict[GridPosition, TileVariant] = field(default_factory=dict)
    writes: int = 0

    def set_tile(self, position: GridPosition, variant: TileVariant) -> None:
        self.tiles[position] = variant
        self.writes += 1

    def get(self, x: int, y: int) -> TileVariant | None:
        return self.tiles.get(GridPosition(x=x, y=y))


@dataclass
class DrawnSegment:
    """A segment as received by a line sink."""

    start: Point
    end: Point
    start_width: float
    end_width: float
    start_color: Color
    end_color: Color


@dataclass
class LineRecorder(LineSink):
    """In-memory line sink."""

    segments: list[DrawnSegment] = field(default_factory=list)

    def draw_segment(
        self,
        start: Point,
        end: Point,
        start_width: float,
        end_width: float,
        start_color: Color,
        end_color: Color,
    ) -> None:
        self.segments.append(
            DrawnSegment(start, end, start_width, end_width, start_color, end_color)
        )


@dataclass
class PlacementRecorder(PlacementSink):
    """In-memory placement sink."""

    positions: list[Point] = field(default_factory=list)

    def place(self, world_position: Point) -> None:
        self.positions.append(world_position)
