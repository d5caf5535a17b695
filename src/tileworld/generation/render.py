"""Preview images of generated maps.

Draws one flat colour per tile variant and the tree segments on top. Meant
for eyeballing a seed, not as a tilemap renderer.
"""

from pathlib import Path

import structlog
from PIL import Image, ImageDraw

from ..tile_variants import TileVariant, value_to_variant
from ..types import Point
from .generator import GenerationResult

logger = structlog.get_logger()

VARIANT_COLORS: dict[TileVariant, tuple[int, int, int]] = {
    TileVariant.BACKGROUND: (70, 140, 70),           # Grass green
    TileVariant.HORIZONTAL_ROAD: (150, 150, 150),
    TileVariant.VERTICAL_ROAD: (130, 130, 130),
    TileVariant.T_INTERSECTION: (190, 170, 90),
    TileVariant.CROSS_INTERSECTION: (210, 190, 100),
    TileVariant.CORNER_DL: (110, 110, 160),
    TileVariant.CORNER_UR: (160, 110, 110),
}


def render_preview(
    result: GenerationResult,
    output_path: Path | None = None,
    cell_px: int = 16,
) -> Image.Image:
    """Render the map and trees to an RGB image.

    World +Y is up, so rows are flipped when drawing.

    Args:
        result: Generation result to draw.
        output_path: If given, the image is also saved there.
        cell_px: Pixels per tile.

    Returns:
        The rendered image.
    """
    height, width = result.variants.shape
    img = Image.new("RGB", (max(width * cell_px, 1), max(height * cell_px, 1)))
    draw = ImageDraw.Draw(img)

    for y in range(height):
        for x in range(width):
            color = VARIANT_COLORS[value_to_variant(result.variants[y, x])]
            top = (height - 1 - y) * cell_px
            draw.rectangle(
                [x * cell_px, top, (x + 1) * cell_px - 1, top + cell_px - 1],
                fill=color,
            )

    def to_pixels(point: Point) -> tuple[float, float]:
        return point.x * cell_px, (height - point.y) * cell_px

    for tree in result.trees:
        for segment in tree.segments:
            draw.line(
                [to_pixels(segment.start), to_pixels(segment.end)],
                fill=segment.color.to_rgb8(),
                width=max(1, round(segment.width * cell_px)),
            )

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        img.save(output_path)
        logger.info("preview_saved", path=str(output_path), size=img.size)

    return img
