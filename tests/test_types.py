"""Tests for core types."""

import math

import pytest
from pydantic import ValidationError

from tileworld.tile_variants import TileVariant, value_to_variant, variant_value
from tileworld.types import Color, GridPosition, Point, Rect, lerp


class TestLerp:
    """Tests for lerp."""

    def test_endpoints(self):
        assert lerp(2.0, 4.0, 0.0) == 2.0
        assert lerp(2.0, 4.0, 1.0) == 4.0
        assert lerp(2.0, 4.0, 0.5) == 3.0

    def test_t_clamped(self):
        """t outside [0, 1] is clamped."""
        assert lerp(2.0, 4.0, -1.0) == 2.0
        assert lerp(2.0, 4.0, 3.0) == 4.0


class TestGridPosition:
    """Tests for GridPosition."""

    def test_immutable(self):
        pos = GridPosition(x=1, y=2)
        with pytest.raises(ValidationError):
            pos.x = 3  # type: ignore

    def test_offset(self):
        assert GridPosition(x=1, y=2).offset(-1, 1) == GridPosition(x=0, y=3)

    def test_center(self):
        assert GridPosition(x=3, y=4).center() == Point(x=3.5, y=4.5)

    def test_hashable(self):
        positions = {GridPosition(x=1, y=1), GridPosition(x=1, y=1), GridPosition(x=2, y=1)}
        assert len(positions) == 2


class TestPoint:
    """Tests for Point."""

    def test_add(self):
        assert Point(x=1.0, y=2.0) + Point(x=0.5, y=-1.0) == Point(x=1.5, y=1.0)

    def test_distance(self):
        assert Point(x=0.0, y=0.0).distance_to(Point(x=3.0, y=4.0)) == 5.0

    def test_polar_degrees(self):
        """Angles are in degrees, counter-clockwise from +X."""
        end = Point(x=1.0, y=1.0).polar(2.0, 90.0)
        assert end.x == pytest.approx(1.0)
        assert end.y == pytest.approx(3.0)
        end = Point(x=0.0, y=0.0).polar(1.0, 45.0)
        assert end.x == pytest.approx(math.sqrt(0.5))

    def test_cell(self):
        assert Point(x=2.7, y=0.1).cell() == GridPosition(x=2, y=0)
        assert Point(x=-0.5, y=3.0).cell() == GridPosition(x=-1, y=3)


class TestRect:
    """Tests for Rect."""

    def test_size(self):
        rect = Rect(x_min=1.0, y_min=2.0, x_max=4.0, y_max=6.0)
        assert rect.width == 3.0
        assert rect.height == 4.0

    def test_contains_half_open(self):
        rect = Rect(x_min=0.0, y_min=0.0, x_max=1.0, y_max=1.0)
        assert rect.contains(Point(x=0.0, y=0.0))
        assert not rect.contains(Point(x=1.0, y=0.5))

    def test_inverted_rejected(self):
        with pytest.raises(ValidationError):
            Rect(x_min=1.0, y_min=0.0, x_max=0.0, y_max=1.0)


class TestColor:
    """Tests for Color."""

    def test_lerp(self):
        a = Color(r=0.0, g=0.2, b=1.0)
        b = Color(r=1.0, g=0.2, b=0.0)
        mid = a.lerp(b, 0.5)
        assert mid.r == pytest.approx(0.5)
        assert mid.g == pytest.approx(0.2)
        assert mid.b == pytest.approx(0.5)

    def test_to_rgb8_clamps(self):
        assert Color(r=-0.5, g=0.5, b=2.0).to_rgb8() == (0, 128, 255)


class TestTileVariant:
    """Tests for TileVariant storage values."""

    def test_values_unique(self):
        values = [variant_value(v) for v in TileVariant]
        assert len(values) == len(set(values))

    def test_round_trip(self):
        for variant in TileVariant:
            assert value_to_variant(variant_value(variant)) == variant

    def test_unknown_is_background(self):
        assert value_to_variant(99) == TileVariant.BACKGROUND

    def test_is_road(self):
        assert not TileVariant.BACKGROUND.is_road
        assert all(v.is_road for v in TileVariant if v is not TileVariant.BACKGROUND)
