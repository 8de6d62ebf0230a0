"""Two-body kinematics of ν̄ₑ + p → e⁺ + n.

Positron energy follows Vogel & Beacom (PRD 60 053003, eq. 8): the
infinite-nucleon-mass value E₀ = Eν − Δ refined to first order in 1/M.
The neutron takes whatever three-momentum the positron leaves, with its
energy put on the neutron mass shell.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation

from ibdgen.core.constants import DEFAULT_CONSTANTS, PhysicsConstants


@dataclass(frozen=True, eq=False)
class FourMomentum:
    """Energy-momentum four-vector in MeV.

    Attributes:
        energy: Total energy E [MeV]
        momentum: Three-momentum p [MeV/c], shape (3,)
    """

    energy: float
    momentum: np.ndarray

    @property
    def p(self) -> float:
        """Momentum magnitude |p| [MeV/c]."""
        return float(np.linalg.norm(self.momentum))

    @property
    def mass(self) -> float:
        """Invariant mass √(E² − |p|²) [MeV/c²], 0 for light-like vectors."""
        m2 = self.energy * self.energy - float(np.dot(self.momentum, self.momentum))
        return math.sqrt(max(m2, 0.0))

    def __eq__(self, other):
        if not isinstance(other, FourMomentum):
            return NotImplemented
        return self.energy == other.energy and np.array_equal(self.momentum, other.momentum)

    def kinetic_energy(self) -> float:
        return self.energy - self.mass


def zeroth_order_positron(e_nu: float, constants: PhysicsConstants = DEFAULT_CONSTANTS):
    """Positron energy, momentum and velocity for infinite nucleon mass.

    E₀ = Eν − Δ, floored at the electron rest mass.

    Returns:
        Tuple (E₀ [MeV], p₀ [MeV/c], v₀)
    """
    m_e = constants.m_e
    e0 = e_nu - constants.delta
    if e0 < m_e:
        e0 = m_e
    p0 = math.sqrt(e0 * e0 - m_e * m_e)
    return e0, p0, p0 / e0


def positron_energy(
    e_nu: float,
    cos_theta: float,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> float:
    """Positron energy with first-order recoil correction.

    E₁ = E₀ [1 − Eν/M (1 − v₀ cosθ)] − y²/M,  y² = (Δ² − mₑ²)/2,
    never below the electron rest mass.

    Args:
        e_nu: Antineutrino energy [MeV]
        cos_theta: Cosine of the positron angle to the antineutrino direction
        constants: Physics constants

    Returns:
        Positron total energy [MeV], always >= mₑ
    """
    e0, _, v0 = zeroth_order_positron(e_nu, constants)
    m = constants.m_p
    e1 = e0 * (1.0 - e_nu / m * (1.0 - v0 * cos_theta)) - constants.y_squared / m
    if e1 < constants.m_e:
        e1 = constants.m_e
    return e1


def positron_energy_array(
    e_nu: np.ndarray,
    cos_theta: np.ndarray,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> np.ndarray:
    """Broadcasting version of :func:`positron_energy`."""
    e_nu = np.asarray(e_nu, dtype=np.float64)
    cos_theta = np.asarray(cos_theta, dtype=np.float64)
    m_e = constants.m_e
    m = constants.m_p

    e0 = np.maximum(e_nu - constants.delta, m_e)
    v0 = np.sqrt(e0 * e0 - m_e * m_e) / e0
    e1 = e0 * (1.0 - e_nu / m * (1.0 - v0 * cos_theta)) - constants.y_squared / m
    return np.maximum(e1, m_e)


def positron_momentum(energy: float, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> float:
    """Positron momentum magnitude from the mass shell, |p| = √(E² − mₑ²)."""
    return math.sqrt(max(energy * energy - constants.m_e * constants.m_e, 0.0))


def neutron_four_momentum(
    neutrino: FourMomentum,
    positron: FourMomentum,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
) -> FourMomentum:
    """Neutron four-momentum from three-momentum conservation.

    p_n = p_ν − p_e (target proton at rest), E_n = √(|p_n|² + mₙ²).
    Energy is not balanced exactly: the first-order positron energy and the
    on-shell neutron need not add up to Eν + mₚ.
    """
    momentum = neutrino.momentum - positron.momentum
    energy = math.sqrt(float(np.dot(momentum, momentum)) + constants.m_n * constants.m_n)
    return FourMomentum(energy=energy, momentum=momentum)


def orthogonal(v: np.ndarray) -> np.ndarray:
    """Unit vector orthogonal to ``v``.

    Zeroes the component of ``v`` with the smallest magnitude and swaps the
    other two with a sign flip, which is numerically safe for any direction.
    """
    x, y, z = (float(c) for c in v)
    ax, ay, az = abs(x), abs(y), abs(z)
    if ax < ay:
        w = (0.0, z, -y) if ax < az else (y, -x, 0.0)
    else:
        w = (-z, 0.0, x) if ay < az else (y, -x, 0.0)
    w = np.array(w, dtype=np.float64)
    return w / np.linalg.norm(w)


def rotate_about_axis(v: np.ndarray, angle: float, axis: np.ndarray) -> np.ndarray:
    """Rotate ``v`` by ``angle`` [rad] about ``axis`` (right-handed)."""
    axis = np.asarray(axis, dtype=np.float64)
    rotvec = angle * axis / np.linalg.norm(axis)
    return Rotation.from_rotvec(rotvec).apply(v)


def isotropic_direction(rng: np.random.Generator) -> np.ndarray:
    """Unit vector uniformly distributed on the sphere.

    cosθ = 2U − 1 and φ = 2πU.
    """
    theta = math.acos(2.0 * rng.random() - 1.0)
    phi = 2.0 * math.pi * rng.random()
    sin_theta = math.sin(theta)
    return np.array([
        sin_theta * math.cos(phi),
        sin_theta * math.sin(phi),
        math.cos(theta),
    ])
