"""Core data structures for IBD event generation.

This module contains the physics constants, the flux spectrum table and
the detector geometry collaborator.
"""

from ibdgen.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ibdgen.core.geometry import BoxDetector, DetectorGeometry
from ibdgen.core.spectrum import SpectrumFormatError, SpectrumLoadError, SpectrumTable

__all__ = [
    "PhysicsConstants",
    "DEFAULT_CONSTANTS",
    "SpectrumTable",
    "SpectrumLoadError",
    "SpectrumFormatError",
    "DetectorGeometry",
    "BoxDetector",
]
