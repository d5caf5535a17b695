"""Road tile variants and their compact storage values."""

from enum import Enum


class TileVariant(str, Enum):
    """Rendering classification of a grid cell."""

    BACKGROUND = "background"
    HORIZONTAL_ROAD = "horizontal_road"
    VERTICAL_ROAD = "vertical_road"
    T_INTERSECTION = "t_intersection"
    CROSS_INTERSECTION = "cross_intersection"
    CORNER_DL = "corner_dl"
    CORNER_UR = "corner_ur"

    @property
    def is_road(self) -> bool:
        """Whether this variant draws a road piece."""
        return self is not TileVariant.BACKGROUND


# Sequential values for uint8 grid storage
_VARIANT_VALUES: dict[TileVariant, int] = {
    TileVariant.BACKGROUND: 0,
    TileVariant.HORIZONTAL_ROAD: 1,
    TileVariant.VERTICAL_ROAD: 2,
    TileVariant.T_INTERSECTION: 3,
    TileVariant.CROSS_INTERSECTION: 4,
    TileVariant.CORNER_DL: 5,
    TileVariant.CORNER_UR: 6,
}

_VALUE_VARIANTS: dict[int, TileVariant] = {v: k for k, v in _VARIANT_VALUES.items()}


def variant_value(variant: TileVariant) -> int:
    """Convert TileVariant to its uint8 storage value."""
    return _VARIANT_VALUES[variant]


def value_to_variant(value: int) -> TileVariant:
    """Convert a uint8 storage value back to TileVariant."""
    return _VALUE_VARIANTS.get(int(value), TileVariant.BACKGROUND)
