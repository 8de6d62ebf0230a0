"""Uniform interaction vertices inside the detector bounding box."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ibdgen.core.geometry import DetectorGeometry


def generate_vertex(
    half_dim_x: float,
    half_dim_y: float,
    half_dim_z: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Uniform point in [−hx, hx] × [−hy, hy] × [−hz, hz].

    Args:
        half_dim_x, half_dim_y, half_dim_z: Box half-lengths
        rng: Random generator

    Returns:
        Position, shape (3,), in the unit of the half-lengths

    Raises:
        ValueError: If a half-length is negative
    """
    half = np.array([half_dim_x, half_dim_y, half_dim_z], dtype=np.float64)
    if np.any(half < 0):
        raise ValueError(f"half-dimensions must be >= 0, got {half.tolist()}")
    return half * (-1.0 + 2.0 * rng.random(3))


class VertexSampler:
    """Draws vertices in the bounding box of a detector geometry.

    The half-dimensions are read from the geometry on every call so the
    vertex always follows the geometry active at generation time.
    """

    def __init__(self, geometry: DetectorGeometry, rng: Optional[np.random.Generator] = None):
        self.geometry = geometry
        self.rng = rng if rng is not None else np.random.default_rng()

    def generate_vertex(self) -> np.ndarray:
        return generate_vertex(
            self.geometry.get_half_dimension(0),
            self.geometry.get_half_dimension(1),
            self.geometry.get_half_dimension(2),
            self.rng,
        )
