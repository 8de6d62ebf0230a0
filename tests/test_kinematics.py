"""Tests for IBD two-body kinematics and rotation helpers."""

import math

import pytest
import numpy as np
from numpy.testing import assert_allclose
from scipy import stats

from ibdgen.physics.kinematics import (
    FourMomentum,
    isotropic_direction,
    neutron_four_momentum,
    orthogonal,
    positron_energy,
    positron_energy_array,
    positron_momentum,
    rotate_about_axis,
    zeroth_order_positron,
)


class TestFourMomentum:
    """Tests for FourMomentum."""

    def test_mass_and_magnitude(self):
        """Test invariant mass and momentum magnitude."""
        p = FourMomentum(energy=5.0, momentum=np.array([3.0, 0.0, 0.0]))
        assert p.p == pytest.approx(3.0)
        assert p.mass == pytest.approx(4.0)
        assert p.kinetic_energy() == pytest.approx(1.0)

    def test_light_like(self):
        """Test that a massless vector has zero mass."""
        p = FourMomentum(energy=2.0, momentum=np.array([0.0, 0.0, 2.0]))
        assert p.mass == pytest.approx(0.0, abs=1e-12)

    def test_equality(self):
        """Test that equality compares energy and momentum component-wise."""
        p = FourMomentum(energy=5.0, momentum=np.array([3.0, 0.0, 0.0]))
        same = FourMomentum(energy=5.0, momentum=np.array([3.0, 0.0, 0.0]))
        tilted = FourMomentum(energy=5.0, momentum=np.array([0.0, 3.0, 0.0]))

        assert p == same
        assert p != tilted
        assert p != FourMomentum(energy=6.0, momentum=p.momentum)
        assert p != (5.0, 3.0, 0.0, 0.0)


class TestPositronEnergy:
    """Tests for the first-order positron energy."""

    def test_zeroth_order(self, constants):
        """Test E0 = Eν − Δ and the derived momentum and velocity."""
        e0, p0, v0 = zeroth_order_positron(5.0, constants)
        assert e0 == pytest.approx(5.0 - constants.delta)
        assert p0 == pytest.approx(math.sqrt(e0**2 - constants.m_e**2))
        assert v0 == pytest.approx(p0 / e0)

    def test_zeroth_order_floor(self, constants):
        """Test that E0 is floored at the electron mass."""
        e0, p0, v0 = zeroth_order_positron(1.0, constants)
        assert e0 == constants.m_e
        assert p0 == 0.0
        assert v0 == 0.0

    def test_close_to_zeroth_order(self, constants):
        """Test that the recoil correction is small at reactor energies."""
        for cos_theta in [-1.0, 0.0, 1.0]:
            e1 = positron_energy(5.0, cos_theta, constants)
            assert abs(e1 - (5.0 - constants.delta)) < 0.06

    def test_recoil_lowers_energy(self, constants):
        """Test that recoil takes energy, more for backward positrons."""
        e0 = 5.0 - constants.delta
        forward = positron_energy(5.0, 1.0, constants)
        backward = positron_energy(5.0, -1.0, constants)
        assert backward < forward < e0

    def test_never_below_electron_mass(self, constants):
        """Test the electron mass floor, including below threshold."""
        for e_nu in [0.0, 1.0, 1.8, 1.81, 3.0]:
            for cos_theta in [-1.0, 0.0, 1.0]:
                assert positron_energy(e_nu, cos_theta, constants) >= constants.m_e

    def test_array_matches_scalar(self, constants, rng):
        """Test that the vectorized version matches the scalar one."""
        e_nu = rng.uniform(0.5, 12.0, 200)
        cos_theta = rng.uniform(-1.0, 1.0, 200)

        expected = [positron_energy(e, c, constants) for e, c in zip(e_nu, cos_theta)]
        assert_allclose(positron_energy_array(e_nu, cos_theta, constants), expected, rtol=1e-12)

    def test_momentum_on_mass_shell(self, constants):
        """Test E² − p² = mₑ²."""
        energy = positron_energy(6.0, 0.2, constants)
        p = positron_momentum(energy, constants)
        assert energy**2 - p**2 == pytest.approx(constants.m_e**2, rel=1e-9)

    def test_momentum_at_rest(self, constants):
        """Test zero momentum at the electron mass."""
        assert positron_momentum(constants.m_e, constants) == 0.0


class TestNeutronFourMomentum:
    """Tests for the neutron recoil."""

    def test_momentum_conservation(self, constants):
        """Test p_n = p_ν − p_e and the neutron mass shell."""
        neutrino = FourMomentum(energy=4.0, momentum=np.array([0.0, 0.0, 4.0]))
        positron = FourMomentum(energy=2.7, momentum=np.array([0.5, -0.3, 2.5]))

        neutron = neutron_four_momentum(neutrino, positron, constants)

        assert_allclose(neutron.momentum, [-0.5, 0.3, 1.5])
        assert neutron.mass == pytest.approx(constants.m_n, abs=1e-6)


class TestRotations:
    """Tests for orthogonal and rotate_about_axis."""

    @pytest.mark.parametrize("v", [
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 1.0, 1.0],
        [-0.3, 0.9, 0.1],
        [1e-8, -2.0, 5.0],
    ])
    def test_orthogonal(self, v):
        """Test that the result is a unit vector perpendicular to v."""
        w = orthogonal(np.array(v))
        assert np.dot(w, v) == pytest.approx(0.0, abs=1e-12)
        assert np.linalg.norm(w) == pytest.approx(1.0)

    def test_quarter_turn_about_z(self):
        """Test that x rotated by π/2 about z is y."""
        result = rotate_about_axis(np.array([1.0, 0.0, 0.0]), math.pi / 2, np.array([0.0, 0.0, 1.0]))
        assert_allclose(result, [0.0, 1.0, 0.0], atol=1e-12)

    def test_axis_not_normalized(self):
        """Test that the axis length does not change the rotation angle."""
        v = np.array([0.2, -0.4, 0.7])
        unit = rotate_about_axis(v, 0.8, np.array([0.0, 1.0, 0.0]))
        scaled = rotate_about_axis(v, 0.8, np.array([0.0, 5.0, 0.0]))
        assert_allclose(unit, scaled, atol=1e-12)

    def test_preserves_norm(self, rng):
        """Test that rotations preserve vector length."""
        v = rng.normal(size=3)
        axis = rng.normal(size=3)
        result = rotate_about_axis(v, 1.234, axis)
        assert np.linalg.norm(result) == pytest.approx(np.linalg.norm(v))

    def test_angle_to_axis_vector(self, rng):
        """Test rotating a vector about a perpendicular axis by acos(c)."""
        direction = isotropic_direction(rng)
        axis = orthogonal(direction)
        for c in [-1.0, -0.3, 0.0, 0.6, 1.0]:
            rotated = rotate_about_axis(direction, math.acos(c), axis)
            assert np.dot(rotated, direction) == pytest.approx(c, abs=1e-12)


class TestIsotropicDirection:
    """Tests for isotropic_direction."""

    def test_unit_length(self, rng):
        """Test that directions are unit vectors."""
        for _ in range(50):
            assert np.linalg.norm(isotropic_direction(rng)) == pytest.approx(1.0)

    def test_uniform_on_sphere(self, rng):
        """Test uniform cosθ and azimuth with Kolmogorov-Smirnov tests."""
        directions = np.array([isotropic_direction(rng) for _ in range(2000)])

        z_test = stats.kstest(directions[:, 2], "uniform", args=(-1.0, 2.0))
        phi = np.arctan2(directions[:, 1], directions[:, 0])
        phi_test = stats.kstest(phi, "uniform", args=(-math.pi, 2.0 * math.pi))

        assert z_test.pvalue > 0.001
        assert phi_test.pvalue > 0.001
