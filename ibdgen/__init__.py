"""Inverse Beta Decay Event Generator

Generates ν̄ₑ + p → e⁺ + n interaction vertices for an antineutrino flux
spectrum inside a rectangular detector volume.

Key Principles:
- Rejection sampling of (Eν, cosθ) from flux × dσ/dcosθ
- Vogel-Beacom differential cross-section to first order in 1/M
- Exact three-momentum conservation at the vertex
- Spectrum table immutable and shared; random generators injected

Version: 1.0
"""

__version__ = "1.0"

# Core data structures
from ibdgen.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ibdgen.core.geometry import BoxDetector, DetectorGeometry
from ibdgen.core.spectrum import SpectrumFormatError, SpectrumLoadError, SpectrumTable

# Physics
from ibdgen.physics import (
    FourMomentum,
    cross_section,
    cross_section_array,
    positron_energy,
    total_cross_section,
)

# Sampling
from ibdgen.sampling import (
    IBDEvent,
    IBDEventSampler,
    Interaction,
    SamplingEnvelopeError,
    VertexSampler,
    compute_envelope,
    generate_vertex,
    validate_envelope,
)

# Configuration and orchestration
from ibdgen.config import (
    ConfigurationError,
    EnvelopeStrategy,
    GeneratorConfig,
    create_validated_config,
    load_config,
)
from ibdgen.generator import IBDGenerator, create_generator

__all__ = [
    # Version
    "__version__",
    # Core
    "PhysicsConstants",
    "DEFAULT_CONSTANTS",
    "SpectrumTable",
    "SpectrumLoadError",
    "SpectrumFormatError",
    "DetectorGeometry",
    "BoxDetector",
    # Physics
    "FourMomentum",
    "cross_section",
    "cross_section_array",
    "total_cross_section",
    "positron_energy",
    # Sampling
    "IBDEvent",
    "IBDEventSampler",
    "Interaction",
    "SamplingEnvelopeError",
    "VertexSampler",
    "compute_envelope",
    "validate_envelope",
    "generate_vertex",
    # Configuration
    "ConfigurationError",
    "EnvelopeStrategy",
    "GeneratorConfig",
    "create_validated_config",
    "load_config",
    # Orchestration
    "IBDGenerator",
    "create_generator",
]
