"""Physics constants for inverse beta decay event generation.

This module is the Single Source of Truth (SSOT) for all physics constants
used by the generator. Import from here rather than defining constants locally.

Import Policy:
    from ibdgen.core.constants import DEFAULT_CONSTANTS, HBARC_MEV_MM

DO NOT use: from ibdgen.core.constants import *
"""

import math
from dataclasses import dataclass

# =============================================================================
# Fundamental Physical Constants
# =============================================================================

# Reduced Planck constant times speed of light [MeV·mm]
# 197.3269804 MeV·fm, 1 fm = 1e-12 mm
HBARC_MEV_MM = 197.3269804e-12

# Fermi coupling constant [MeV⁻²]
G_FERMI = 1.16639e-11

# =============================================================================
# Particle Masses [MeV/c²]
# =============================================================================

PROTON_MASS_MEV = 938.27208816
NEUTRON_MASS_MEV = 939.56542052
ELECTRON_MASS_MEV = 0.51099895000

# =============================================================================
# Weak Interaction Couplings (Vogel & Beacom, PRD 60 053003)
# =============================================================================

# Cosine of the Cabibbo angle, mean of the two quoted determinations
COS_CABIBBO = (0.9741 + 0.9756) / 2.0

# Energy-independent inner radiative correction
RADIATIVE_CORRECTION = 0.024

# Vector coupling
F_VECTOR = 1.00

# Anomalous nucleon isovector magnetic moment, mu_p - mu_n - 1
F2_WEAK_MAGNETISM = 3.706

# Axial vector coupling
G_AXIAL = 1.26


@dataclass(frozen=True)
class PhysicsConstants:
    """Physics constants for the IBD cross-section and kinematics.

    Units: energies and masses in MeV, lengths in mm.
    """

    m_p: float = PROTON_MASS_MEV
    """Proton mass [MeV/c²]"""

    m_n: float = NEUTRON_MASS_MEV
    """Neutron mass [MeV/c²]"""

    m_e: float = ELECTRON_MASS_MEV
    """Electron mass [MeV/c²]"""

    hbarc: float = HBARC_MEV_MM
    """ħc [MeV·mm], converts MeV⁻² to mm²"""

    G_F: float = G_FERMI
    """Fermi constant [MeV⁻²]"""

    cos_theta_c: float = COS_CABIBBO
    """Cosine of the Cabibbo angle"""

    rad_cor: float = RADIATIVE_CORRECTION
    """Inner radiative correction"""

    f: float = F_VECTOR
    f2: float = F2_WEAK_MAGNETISM
    g: float = G_AXIAL

    @property
    def delta(self) -> float:
        """Neutron-proton mass difference [MeV]."""
        return self.m_n - self.m_p

    @property
    def y_squared(self) -> float:
        """Recoil correction parameter y² = (Δ² - mₑ²)/2 [MeV²]."""
        return (self.delta * self.delta - self.m_e * self.m_e) / 2.0

    @property
    def ibd_threshold(self) -> float:
        """Antineutrino energy threshold for ν̄ₑ + p → e⁺ + n [MeV]."""
        return ((self.m_n + self.m_e) ** 2 - self.m_p ** 2) / (2.0 * self.m_p)

    @property
    def sigma_0(self) -> float:
        """Overall cross-section normalization G_F² cos²θ_C (1 + Δ_R) / π [MeV⁻⁴]."""
        return (
            self.G_F * self.G_F * self.cos_theta_c * self.cos_theta_c
            / math.pi * (1.0 + self.rad_cor)
        )


DEFAULT_CONSTANTS = PhysicsConstants()
