"""Map persistence: save and load generated maps."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np
import structlog
from numpy.typing import NDArray

from ..exceptions import MapFormatError
from ..types import Color, Point
from .branches import Segment
from .generator import GenerationResult, Tree

logger = structlog.get_logger()

FORMAT_VERSION = 1


def save_map(path: Path, result: GenerationResult) -> Path:
    """Save a generated map to disk.

    Uses numpy's compressed .npz format.

    Args:
        path: Output path. A missing .npz suffix is added, as numpy does.
        result: Generation result to store.

    Returns:
        The path actually written.
    """
    if path.suffix != ".npz":
        path = path.with_name(path.name + ".npz")

    trees_data = [_tree_to_dict(tree) for tree in result.trees]

    metadata = {
        "version": FORMAT_VERSION,
        "seed": result.seed,
        "width": result.roads.width,
        "height": result.roads.height,
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    np.savez_compressed(
        path,
        variants=result.variants,
        road_mask=result.road_mask,
        trees=np.frombuffer(json.dumps(trees_data).encode("utf-8"), dtype=np.uint8),
        metadata=np.frombuffer(json.dumps(metadata).encode("utf-8"), dtype=np.uint8),
    )

    file_size = path.stat().st_size / 1024
    logger.info("map_saved", path=str(path), size_kb=round(file_size, 1))
    return path


def load_map(
    path: Path,
) -> tuple[NDArray[np.uint8], NDArray[np.bool_], list[Tree], dict[str, Any]]:
    """Load a map from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (variant grid, road mask, trees, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        MapFormatError: If a required array is missing.
    """
    if not path.exists():
        raise FileNotFoundError(f"Map file not found: {path}")

    with np.load(path) as data:
        for key in ("variants", "road_mask"):
            if key not in data:
                raise MapFormatError(f"Invalid map file: missing '{key}' array")
        variants = data["variants"].astype(np.uint8)
        mask = data["road_mask"].astype(bool)

        if "trees" in data:
            trees = [_tree_from_dict(t) for t in json.loads(_decode(data["trees"]))]
        else:
            trees = []

        metadata = json.loads(_decode(data["metadata"])) if "metadata" in data else {}

    logger.info(
        "map_loaded", path=str(path), width=variants.shape[1], height=variants.shape[0]
    )
    return variants, mask, trees, metadata


def _decode(array: NDArray[np.uint8]) -> str:
    return array.tobytes().decode("utf-8")


def _point(data: list[float]) -> Point:
    return Point(x=data[0], y=data[1])


def _tree_to_dict(tree: Tree) -> dict[str, Any]:
    return {
        "position": [tree.position.x, tree.position.y],
        "segments": [
            {
                "start": [s.start.x, s.start.y],
                "end": [s.end.x, s.end.y],
                "depth": s.depth,
                "width": s.width,
                "end_width": s.end_width,
                "color": list(s.color.as_tuple()),
            }
            for s in tree.segments
        ],
    }


def _tree_from_dict(data: dict[str, Any]) -> Tree:
    segments = [
        Segment(
            start=_point(s["start"]),
            end=_point(s["end"]),
            depth=s["depth"],
            width=s["width"],
            end_width=s["end_width"],
            color=Color(r=s["color"][0], g=s["color"][1], b=s["color"][2]),
        )
        for s in data["segments"]
    ]
    return Tree(position=_point(data["position"]), segments=segments)
