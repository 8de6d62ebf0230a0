"""IBD event sampler.

Draws (Eν, cosθ) from Φ(E) · dσ/dcosθ(E, cosθ) by rejection sampling and
assembles the neutrino, positron and neutron four-momenta of one
interaction vertex:

    1. isotropic antineutrino direction n̂
    2. (Eν, cosθ) from the rejection sampler
    3. positron energy with first-order recoil correction
    4. p_ν = Eν n̂
    5. p_e = |p_e| n̂ rotated by acos(cosθ) about an axis ⟂ n̂ whose
       azimuth around n̂ is uniform in [0, 2π)
    6. p_n = p_ν − p_e on the neutron mass shell
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from ibdgen.config.generator_config import SamplingConfig
from ibdgen.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.physics.cross_section import cross_section_array
from ibdgen.physics.kinematics import (
    FourMomentum,
    isotropic_direction,
    neutron_four_momentum,
    orthogonal,
    positron_energy,
    positron_momentum,
    rotate_about_axis,
)
from ibdgen.sampling.envelope import SamplingEnvelopeError, compute_envelope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Interaction:
    """Accepted rejection-sampling candidate.

    Attributes:
        energy: Antineutrino energy [MeV]
        cos_theta: Cosine of the positron angle to the antineutrino direction
        n_trials: Candidates drawn to obtain this one (including itself)
    """

    energy: float
    cos_theta: float
    n_trials: int


@dataclass(frozen=True, eq=False)
class IBDEvent:
    """Kinematics of one ν̄ₑ + p → e⁺ + n vertex.

    Attributes:
        direction: Unit antineutrino direction
        cos_theta: Cosine of the positron angle to the antineutrino direction
        neutrino: Antineutrino four-momentum [MeV]
        positron: Positron four-momentum [MeV]
        neutron: Neutron four-momentum [MeV]
    """

    direction: np.ndarray
    cos_theta: float
    neutrino: FourMomentum
    positron: FourMomentum
    neutron: FourMomentum

    def __eq__(self, other):
        if not isinstance(other, IBDEvent):
            return NotImplemented
        return (
            self.cos_theta == other.cos_theta
            and np.array_equal(self.direction, other.direction)
            and self.neutrino == other.neutrino
            and self.positron == other.positron
            and self.neutron == other.neutron
        )


@dataclass
class SamplerStatistics:
    """Running counters of the rejection loop."""

    n_trials: int = 0
    n_accepted: int = 0
    envelope_violations: int = 0

    @property
    def acceptance_rate(self) -> float:
        if self.n_trials == 0:
            return 0.0
        return self.n_accepted / self.n_trials


class IBDEventSampler:
    """Generates IBD interactions for a flux spectrum.

    The spectrum is shared read-only; each sampler owns its random generator
    so several samplers can run side by side without correlated sequences.

    Args:
        spectrum: Antineutrino flux spectrum
        rng: Random generator. If None, ``numpy.random.default_rng(config.seed)``
        constants: Physics constants
        config: Sampling configuration (envelope, batching, trial cap)

    Raises:
        SamplingEnvelopeError: If the spectrum has no flux above threshold.
    """

    def __init__(
        self,
        spectrum: SpectrumTable,
        rng: Optional[np.random.Generator] = None,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
        config: Optional[SamplingConfig] = None,
    ):
        self.spectrum = spectrum
        self.constants = constants
        self.config = config if config is not None else SamplingConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.statistics = SamplerStatistics()

        self.envelope = compute_envelope(
            spectrum,
            strategy=self.config.envelope_strategy,
            constants=constants,
            safety_factor=self.config.safety_factor,
            n_energy=self.config.n_energy,
            n_cos=self.config.n_cos,
        )
        self._violation_reported = False

    def generate_interaction(self) -> Interaction:
        """Draw (Eν, cosθ) weighted by flux × differential cross-section.

        Candidates are uniform in [e_min, e_max] × [−1, 1] and drawn in
        batches; the first accepted candidate in draw order is returned.

        Returns:
            Interaction

        Raises:
            SamplingEnvelopeError: If no candidate is accepted within
                ``config.max_trials`` trials.
        """
        e_min = self.spectrum.e_min
        e_span = self.spectrum.e_max - e_min
        max_trials = self.config.max_trials
        rng = self.rng

        n_trials = 0
        while n_trials < max_trials:
            n = min(self.config.batch_size, max_trials - n_trials)

            energies = e_min + e_span * rng.random(n)
            cosines = -1.0 + 2.0 * rng.random(n)
            tests = self.envelope * rng.random(n)

            weights = (
                cross_section_array(energies, cosines, self.constants)
                * self.spectrum.interpolate_array(energies)
            )

            accepted = np.flatnonzero(tests < weights)
            n_drawn = int(accepted[0]) + 1 if accepted.size else n
            self._record_violations(weights[:n_drawn])
            n_trials += n_drawn

            if accepted.size:
                i = accepted[0]
                self.statistics.n_trials += n_trials
                self.statistics.n_accepted += 1
                return Interaction(
                    energy=float(energies[i]),
                    cos_theta=float(cosines[i]),
                    n_trials=n_trials,
                )

        self.statistics.n_trials += n_trials
        raise SamplingEnvelopeError(
            f"No candidate accepted after {n_trials} trials "
            f"(envelope {self.envelope:.4g}, {self.spectrum!r})"
        )

    def generate_event(self) -> IBDEvent:
        """Generate the four-momenta of one IBD vertex.

        Returns:
            IBDEvent with neutrino, positron and neutron four-momenta
        """
        direction = isotropic_direction(self.rng)

        interaction = self.generate_interaction()
        e_nu = interaction.energy
        cos_theta = interaction.cos_theta

        e_pos = positron_energy(e_nu, cos_theta, self.constants)
        p_pos = positron_momentum(e_pos, self.constants)

        neutrino = FourMomentum(energy=e_nu, momentum=direction * e_nu)

        # Scattering plane at a random azimuth around the neutrino direction
        phi = 2.0 * math.pi * self.rng.random()
        axis = rotate_about_axis(orthogonal(direction), phi, direction)
        pos_momentum = rotate_about_axis(p_pos * direction, math.acos(cos_theta), axis)
        positron = FourMomentum(energy=e_pos, momentum=pos_momentum)

        neutron = neutron_four_momentum(neutrino, positron, self.constants)

        logger.debug(
            f"nu dir: {direction}, e_nu: {e_nu:.4f} MeV, cos theta: {cos_theta:.4f}, "
            f"positron energy: {e_pos:.4f} MeV"
        )

        return IBDEvent(
            direction=direction,
            cos_theta=cos_theta,
            neutrino=neutrino,
            positron=positron,
            neutron=neutron,
        )

    def generate_events(self, n_events: int) -> Iterator[IBDEvent]:
        """Yield ``n_events`` independent events."""
        for _ in range(n_events):
            yield self.generate_event()

    def _record_violations(self, weights: np.ndarray) -> None:
        n_violations = int(np.count_nonzero(weights > self.envelope))
        if n_violations == 0:
            return
        self.statistics.envelope_violations += n_violations
        if not self._violation_reported:
            logger.warning(
                f"Target density {float(np.max(weights)):.6g} exceeds the rejection "
                f"envelope {self.envelope:.6g}; sampled events are biased. "
                "Use the grid envelope or a larger safety factor."
            )
            self._violation_reported = True
