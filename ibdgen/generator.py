"""Top-level IBD generator.

Bundles the event sampler and the vertex sampler around one spectrum,
one detector geometry and one random generator.

Usage:
    from ibdgen import create_generator, create_validated_config

    config = create_validated_config(path="reactor.dat", seed=1)
    generator = create_generator(config)
    event, vertex = generator.generate()
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

import numpy as np

from ibdgen.config.generator_config import GeneratorConfig, SamplingConfig
from ibdgen.config.validation import validate_config
from ibdgen.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ibdgen.core.geometry import BoxDetector, DetectorGeometry
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.sampling.event_sampler import IBDEvent, IBDEventSampler
from ibdgen.sampling.vertex import VertexSampler

logger = logging.getLogger(__name__)


class IBDGenerator:
    """Generates IBD vertices: four-momenta plus a position in the detector.

    Args:
        spectrum: Antineutrino flux spectrum
        geometry: Detector geometry collaborator
        rng: Random generator shared by the event and vertex samplers
        constants: Physics constants
        sampling: Rejection sampling configuration
    """

    def __init__(
        self,
        spectrum: SpectrumTable,
        geometry: DetectorGeometry,
        rng: Optional[np.random.Generator] = None,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
        sampling: Optional[SamplingConfig] = None,
    ):
        sampling = sampling if sampling is not None else SamplingConfig()
        self.rng = rng if rng is not None else np.random.default_rng(sampling.seed)
        self.spectrum = spectrum
        self.geometry = geometry
        self.event_sampler = IBDEventSampler(
            spectrum, rng=self.rng, constants=constants, config=sampling,
        )
        self.vertex_sampler = VertexSampler(geometry, rng=self.rng)

    def generate_event(self) -> IBDEvent:
        return self.event_sampler.generate_event()

    def generate_vertex(self) -> np.ndarray:
        return self.vertex_sampler.generate_vertex()

    def generate(self) -> Tuple[IBDEvent, np.ndarray]:
        """One event and its vertex position."""
        return self.generate_event(), self.generate_vertex()

    def generate_many(self, n_events: int) -> Iterator[Tuple[IBDEvent, np.ndarray]]:
        for _ in range(n_events):
            yield self.generate()

    @property
    def statistics(self):
        return self.event_sampler.statistics


def create_generator(
    config: GeneratorConfig,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> IBDGenerator:
    """Build an IBDGenerator from a configuration.

    Args:
        config: Generator configuration
        constants: Physics constants

    Returns:
        IBDGenerator

    Raises:
        ConfigurationError: If the configuration is invalid.
        SpectrumLoadError: If the spectrum file cannot be opened.
        SpectrumFormatError: If the spectrum file is malformed.
        SamplingEnvelopeError: If the spectrum has no flux above threshold.
    """
    validate_config(config)

    spectrum = SpectrumTable.load(config.spectrum.path)
    detector = BoxDetector(
        half_x=config.detector.half_x,
        half_y=config.detector.half_y,
        half_z=config.detector.half_z,
    )
    rng = np.random.default_rng(config.sampling.seed)

    logger.info(
        f"Created IBD generator: {spectrum!r}, detector half-dims "
        f"({detector.half_x}, {detector.half_y}, {detector.half_z}) mm, "
        f"seed={config.sampling.seed}"
    )
    return IBDGenerator(spectrum, detector, rng=rng, constants=constants, sampling=config.sampling)
