"""Detector geometry collaborator.

The generator only needs the half-dimensions of the detector bounding box.
Any object with a ``get_half_dimension(axis)`` method can act as the geometry;
``BoxDetector`` is the plain implementation used by the CLI and tests.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class DetectorGeometry(Protocol):
    """Anything exposing the bounding-box half-dimensions per axis."""

    def get_half_dimension(self, axis: int) -> float:
        """Half-length of the bounding box along axis 0 (x), 1 (y) or 2 (z)."""
        ...


@dataclass
class BoxDetector:
    """Rectangular detector centred on the origin.

    Attributes are mutable: samplers read them at generation time, so a
    resized detector is picked up by the next vertex.

    Attributes:
        half_x, half_y, half_z: Half-lengths [mm]
    """

    half_x: float
    half_y: float
    half_z: float

    def __post_init__(self):
        for name in ("half_x", "half_y", "half_z"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

    def get_half_dimension(self, axis: int) -> float:
        if axis == 0:
            return self.half_x
        if axis == 1:
            return self.half_y
        if axis == 2:
            return self.half_z
        raise IndexError(f"axis must be 0, 1 or 2, got {axis}")

    @property
    def volume(self) -> float:
        """Box volume [mm³]."""
        return 8.0 * self.half_x * self.half_y * self.half_z
