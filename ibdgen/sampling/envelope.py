"""Upper bounds for rejection sampling of (Eν, cosθ).

The sampler accepts a uniform candidate (E, c) when
U · bound < dσ/dcosθ(E, c) · Φ(E). The bound must dominate that product
everywhere on [e_min, e_max] × [−1, 1], otherwise the accepted events are
biased towards the region where it is exceeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ibdgen.config.defaults import (
    DEFAULT_ENVELOPE_N_COS,
    DEFAULT_ENVELOPE_N_ENERGY,
    DEFAULT_ENVELOPE_SAFETY_FACTOR,
)
from ibdgen.config.enums import EnvelopeStrategy
from ibdgen.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.physics.cross_section import cross_section, cross_section_array

logger = logging.getLogger(__name__)


class SamplingEnvelopeError(RuntimeError):
    """Raised when rejection sampling cannot produce an event.

    Either the envelope is not positive (no flux above threshold) or the
    trial cap was reached before a candidate was accepted.
    """

    pass


@dataclass(frozen=True)
class EnvelopeReport:
    """Comparison of a bound against the scanned target density.

    Attributes:
        bound: Envelope value under test
        grid_max: Maximum of flux × cross-section on the scan grid
        violation_fraction: Fraction of grid points where the density exceeds the bound
        max_ratio: Largest density / bound ratio on the grid (> 1 means violation)
    """

    bound: float
    grid_max: float
    violation_fraction: float
    max_ratio: float

    @property
    def dominates(self) -> bool:
        return self.max_ratio <= 1.0


def _scan_density(
    spectrum: SpectrumTable,
    constants: PhysicsConstants,
    n_energy: int,
    n_cos: int,
) -> np.ndarray:
    """Evaluate Φ(E) · dσ/dcosθ on the scan grid, shape (nE, n_cos).

    Table nodes inside the range are always included since the piecewise
    linear flux peaks on a node.
    """
    energies = np.union1d(
        np.linspace(spectrum.e_min, spectrum.e_max, n_energy),
        spectrum.energy,
    )
    cosines = np.linspace(-1.0, 1.0, n_cos)

    flux = spectrum.interpolate_array(energies)
    dsigma = cross_section_array(energies[:, None], cosines[None, :], constants)
    return dsigma * flux[:, None]


def compute_envelope(
    spectrum: SpectrumTable,
    strategy: EnvelopeStrategy = EnvelopeStrategy.GRID,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
    safety_factor: float = DEFAULT_ENVELOPE_SAFETY_FACTOR,
    n_energy: int = DEFAULT_ENVELOPE_N_ENERGY,
    n_cos: int = DEFAULT_ENVELOPE_N_COS,
) -> float:
    """Upper bound on Φ(E) · dσ/dcosθ(E, cosθ) for rejection sampling.

    Args:
        spectrum: Flux spectrum
        strategy: GRID (scan maximum × safety factor) or LEGACY
            (dσ/dcosθ(e_max, −1) × max Φ)
        constants: Physics constants
        safety_factor: Multiplier on the scanned maximum, GRID only
        n_energy: Energies in the scan, GRID only
        n_cos: Cosines in the scan, GRID only

    Returns:
        Envelope value [mm² × flux units]

    Raises:
        SamplingEnvelopeError: If the envelope is not positive, i.e. the
            spectrum has no flux above the IBD threshold.
    """
    if strategy == EnvelopeStrategy.LEGACY:
        bound = cross_section(spectrum.e_max, -1.0, constants) * spectrum.flux_max
    elif strategy == EnvelopeStrategy.GRID:
        density = _scan_density(spectrum, constants, n_energy, n_cos)
        bound = float(np.max(density)) * safety_factor
    else:
        raise ValueError(f"Unknown envelope strategy: {strategy!r}")

    if not bound > 0.0:
        raise SamplingEnvelopeError(
            f"Envelope is {bound:.4g} for {spectrum!r}: no flux above the IBD "
            f"threshold ({constants.ibd_threshold:.4f} MeV)"
        )

    logger.info(f"Rejection envelope ({strategy.value}): {bound:.6g}")
    return bound


def validate_envelope(
    spectrum: SpectrumTable,
    bound: float,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
    n_energy: int = 2 * DEFAULT_ENVELOPE_N_ENERGY,
    n_cos: int = 2 * DEFAULT_ENVELOPE_N_COS,
) -> EnvelopeReport:
    """Check a bound against the density on a (finer) scan grid.

    Args:
        spectrum: Flux spectrum
        bound: Envelope value to check
        constants: Physics constants
        n_energy: Energies in the scan
        n_cos: Cosines in the scan

    Returns:
        EnvelopeReport
    """
    density = _scan_density(spectrum, constants, n_energy, n_cos)
    grid_max = float(np.max(density))

    report = EnvelopeReport(
        bound=float(bound),
        grid_max=grid_max,
        violation_fraction=float(np.mean(density > bound)),
        max_ratio=grid_max / bound if bound > 0 else float("inf"),
    )

    if not report.dominates:
        logger.warning(
            f"Envelope {bound:.6g} is exceeded on {report.violation_fraction:.2%} "
            f"of the scan grid (max ratio {report.max_ratio:.3f})"
        )
    return report
