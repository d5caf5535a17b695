"""Gradient noise over 2D coordinates.

A small lattice gradient noise: each integer corner picks one of eight fixed
gradients by ``(ix + iy) mod 8``, dot products are blended with the quintic
fade curve, and the result is rescaled from [-1, 1] to [0, 1]. The seed is not
part of the field; callers fold it into their coordinates.
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Order matters: gradient selection indexes into this table.
GRADIENTS: tuple[tuple[float, float], ...] = (
    (1.0, 1.0),
    (-1.0, 1.0),
    (1.0, -1.0),
    (-1.0, -1.0),
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
)

_GRADIENT_ARRAY = np.array(GRADIENTS, dtype=np.float64)


def fade(t: float) -> float:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _dot_grid_gradient(ix: int, iy: int, x: float, y: float) -> float:
    gx, gy = GRADIENTS[(ix + iy) % len(GRADIENTS)]
    return (x - ix) * gx + (y - iy) * gy


class NoiseField:
    """Deterministic gradient noise field with values in [0, 1]."""

    def sample(self, x: float, y: float) -> float:
        """Sample the field at a single point."""
        x0 = math.floor(x)
        x1 = x0 + 1
        y0 = math.floor(y)
        y1 = y0 + 1

        fade_x = fade(x - x0)
        fade_y = fade(y - y0)

        n0 = _dot_grid_gradient(x0, y0, x, y)
        n1 = _dot_grid_gradient(x1, y0, x, y)
        ix0 = _lerp(n0, n1, fade_x)

        n0 = _dot_grid_gradient(x0, y1, x, y)
        n1 = _dot_grid_gradient(x1, y1, x, y)
        ix1 = _lerp(n0, n1, fade_x)

        value = _lerp(ix0, ix1, fade_y)
        return (value + 1.0) / 2.0

    def sample_array(self, x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
        """Vectorized sample over broadcastable coordinate arrays.

        Args:
            x: X coordinates.
            y: Y coordinates, broadcastable against x.

        Returns:
            Array of noise values matching the broadcast shape.
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x, y = np.broadcast_arrays(x, y)

        x0 = np.floor(x).astype(np.int64)
        y0 = np.floor(y).astype(np.int64)
        x1 = x0 + 1
        y1 = y0 + 1

        fade_x = _fade_array(x - x0)
        fade_y = _fade_array(y - y0)

        n0 = _dot_grid_gradient_array(x0, y0, x, y)
        n1 = _dot_grid_gradient_array(x1, y0, x, y)
        ix0 = n0 + fade_x * (n1 - n0)

        n0 = _dot_grid_gradient_array(x0, y1, x, y)
        n1 = _dot_grid_gradient_array(x1, y1, x, y)
        ix1 = n0 + fade_x * (n1 - n0)

        value = ix0 + fade_y * (ix1 - ix0)
        return (value + 1.0) / 2.0

    def sample_grid(
        self,
        width: int,
        height: int,
        seed: int,
        scale: float,
    ) -> NDArray[np.float64]:
        """Sample the field at every cell of a grid.

        Cell (x, y) is sampled at ((x + seed) * scale, (y + seed) * scale).

        Args:
            width: Grid width.
            height: Grid height.
            seed: Offset added to cell coordinates before scaling.
            scale: Noise frequency per cell.

        Returns:
            Array of shape (height, width), indexed [y, x].
        """
        width = max(width, 0)
        height = max(height, 0)
        xs = (np.arange(width, dtype=np.float64) + seed) * scale
        ys = (np.arange(height, dtype=np.float64) + seed) * scale
        return self.sample_array(xs[np.newaxis, :], ys[:, np.newaxis])


def _fade_array(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _dot_grid_gradient_array(
    ix: NDArray[np.int64],
    iy: NDArray[np.int64],
    x: NDArray[np.float64],
    y: NDArray[np.float64],
) -> NDArray[np.float64]:
    gradients = _GRADIENT_ARRAY[np.mod(ix + iy, len(GRADIENTS))]
    return (x - ix) * gradients[..., 0] + (y - iy) * gradients[..., 1]
