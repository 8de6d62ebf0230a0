"""Tests for rejection sampling envelopes and IBD event generation."""

import logging

import pytest
import numpy as np
from numpy.testing import assert_allclose
from scipy import integrate, stats

from ibdgen.config.enums import EnvelopeStrategy
from ibdgen.config.generator_config import SamplingConfig
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.physics.cross_section import cross_section, total_cross_section_array
from ibdgen.physics.kinematics import orthogonal
from ibdgen.sampling.envelope import (
    SamplingEnvelopeError,
    compute_envelope,
    validate_envelope,
)
from ibdgen.sampling.event_sampler import IBDEventSampler


class TestEnvelope:
    """Tests for compute_envelope and validate_envelope."""

    def test_legacy_value(self, small_spectrum, constants):
        """Test the legacy bound dσ/dcosθ(e_max, −1) × max Φ."""
        bound = compute_envelope(small_spectrum, EnvelopeStrategy.LEGACY, constants)
        assert bound == pytest.approx(cross_section(8.0, -1.0, constants) * 3.0)

    def test_grid_dominates_fine_scan(self, reactor_spectrum, constants):
        """Test that the grid bound holds on a finer scan."""
        bound = compute_envelope(reactor_spectrum, EnvelopeStrategy.GRID, constants)
        report = validate_envelope(reactor_spectrum, bound, constants)

        assert report.dominates
        assert report.violation_fraction == 0.0
        assert report.grid_max <= bound

    def test_safety_factor_scales_grid_bound(self, reactor_spectrum, constants):
        """Test that the grid bound is proportional to the safety factor."""
        base = compute_envelope(reactor_spectrum, EnvelopeStrategy.GRID, constants, safety_factor=1.0)
        padded = compute_envelope(reactor_spectrum, EnvelopeStrategy.GRID, constants, safety_factor=1.5)
        assert padded == pytest.approx(1.5 * base)

    def test_too_small_bound_reported(self, reactor_spectrum, constants, caplog):
        """Test that an undercutting bound is detected and logged."""
        grid_max = compute_envelope(reactor_spectrum, EnvelopeStrategy.GRID, constants, safety_factor=1.0)

        with caplog.at_level(logging.WARNING, logger="ibdgen.sampling.envelope"):
            report = validate_envelope(reactor_spectrum, 0.5 * grid_max, constants)

        assert not report.dominates
        assert report.max_ratio > 1.9
        assert 0.0 < report.violation_fraction < 1.0
        assert "exceeded" in caplog.text

    def test_no_flux_above_threshold(self, constants):
        """Test that a spectrum entirely below threshold is rejected."""
        spectrum = SpectrumTable([0.5, 1.5], [1.0, 1.0])
        for strategy in EnvelopeStrategy:
            with pytest.raises(SamplingEnvelopeError, match="no flux above the IBD threshold"):
                compute_envelope(spectrum, strategy, constants)


class TestGenerateInteraction:
    """Tests for IBDEventSampler.generate_interaction."""

    def test_bounds(self, sampler, reactor_spectrum, constants):
        """Test that accepted candidates lie in the kinematic domain."""
        for _ in range(200):
            interaction = sampler.generate_interaction()
            assert constants.ibd_threshold <= interaction.energy <= reactor_spectrum.e_max
            assert -1.0 <= interaction.cos_theta <= 1.0
            assert interaction.n_trials >= 1

    def test_statistics(self, sampler):
        """Test the trial and acceptance counters."""
        interactions = [sampler.generate_interaction() for _ in range(100)]
        stats_ = sampler.statistics

        assert stats_.n_accepted == 100
        assert stats_.n_trials == sum(i.n_trials for i in interactions)
        assert 0.0 < stats_.acceptance_rate <= 1.0
        assert stats_.envelope_violations == 0

    def test_ramp_spectrum(self, two_point_spectrum, rng, constants):
        """Test a two-point ramp starting just below threshold."""
        sampler = IBDEventSampler(two_point_spectrum, rng=rng, constants=constants)

        energies = np.array([sampler.generate_interaction().energy for _ in range(300)])

        assert np.all(energies >= constants.ibd_threshold)
        assert np.all(energies <= 10.0)
        # Flux and cross-section both rise with energy
        assert np.mean(energies) > 6.0

    def test_mean_energy_matches_density(self, reactor_spectrum, constants):
        """Test the mean sampled energy against flux × σ integrated numerically."""
        sampler = IBDEventSampler(
            reactor_spectrum, rng=np.random.default_rng(99), constants=constants,
        )
        energies = np.array([sampler.generate_interaction().energy for _ in range(1000)])

        grid = np.linspace(reactor_spectrum.e_min, reactor_spectrum.e_max, 2001)
        density = reactor_spectrum.interpolate_array(grid) * total_cross_section_array(grid, constants)
        expected_mean = (
            integrate.simpson(grid * density, x=grid) / integrate.simpson(density, x=grid)
        )

        standard_error = np.std(energies) / np.sqrt(len(energies))
        assert abs(np.mean(energies) - expected_mean) < 5.0 * standard_error

    def test_trial_cap(self, reactor_spectrum, rng, constants):
        """Test that the trial cap raises SamplingEnvelopeError."""
        config = SamplingConfig(safety_factor=1e12, max_trials=500)
        sampler = IBDEventSampler(reactor_spectrum, rng=rng, constants=constants, config=config)

        with pytest.raises(SamplingEnvelopeError, match="after 500 trials"):
            sampler.generate_interaction()
        assert sampler.statistics.n_trials == 500
        assert sampler.statistics.n_accepted == 0

    def test_spectrum_below_threshold(self, rng, constants):
        """Test that a sampler cannot be built without flux above threshold."""
        spectrum = SpectrumTable([0.5, 1.5], [1.0, 1.0])
        with pytest.raises(SamplingEnvelopeError):
            IBDEventSampler(spectrum, rng=rng, constants=constants)

    def test_envelope_violation_detected(self, sampler, caplog):
        """Test that candidates above the envelope are counted and logged once."""
        sampler.envelope = 1e-300

        with caplog.at_level(logging.WARNING, logger="ibdgen.sampling.event_sampler"):
            for _ in range(5):
                sampler.generate_interaction()

        assert sampler.statistics.envelope_violations >= 5
        assert caplog.text.count("exceeds the rejection envelope") == 1


class TestGenerateEvent:
    """Tests for IBDEventSampler.generate_event."""

    def test_momentum_conservation(self, events):
        """Test p_ν = p_e + p_n for every event."""
        for event in events:
            assert_allclose(
                event.neutrino.momentum,
                event.positron.momentum + event.neutron.momentum,
                atol=1e-9,
            )

    def test_mass_shells(self, events, constants):
        """Test that each particle sits on its mass shell."""
        for event in events:
            assert event.neutrino.mass == pytest.approx(0.0, abs=1e-5)
            assert event.positron.mass == pytest.approx(constants.m_e, abs=1e-6)
            assert event.neutron.mass == pytest.approx(constants.m_n, abs=1e-6)

    def test_neutrino_along_direction(self, events):
        """Test p_ν = Eν n̂ with a unit direction."""
        for event in events:
            assert np.linalg.norm(event.direction) == pytest.approx(1.0)
            assert_allclose(event.neutrino.momentum, event.neutrino.energy * event.direction)

    def test_opening_angle(self, events):
        """Test that the positron makes angle acos(cosθ) with the neutrino."""
        for event in events:
            pos_dir = event.positron.momentum / event.positron.p
            assert np.dot(pos_dir, event.direction) == pytest.approx(event.cos_theta, abs=1e-9)

    def test_approximate_energy_balance(self, events, constants):
        """Test Eν + mₚ ≈ Eₑ + Eₙ to first order in 1/M."""
        for event in events:
            initial = event.neutrino.energy + constants.m_p
            final = event.positron.energy + event.neutron.energy
            assert final == pytest.approx(initial, abs=0.02)

    def test_isotropic_neutrino_direction(self, events):
        """Test that neutrino directions are uniform in cosθ."""
        z = np.array([event.direction[2] for event in events])
        assert stats.kstest(z, "uniform", args=(-1.0, 2.0)).pvalue > 0.001

    def test_positron_azimuth_uniform(self, events):
        """Test that the scattering plane has no preferred azimuth."""
        # Azimuth of the positron around the neutrino, measured from orthogonal(n̂)
        azimuths = []
        for event in events:
            n = event.direction
            u = orthogonal(n)
            w = np.cross(n, u)
            transverse = event.positron.momentum - np.dot(event.positron.momentum, n) * n
            if np.linalg.norm(transverse) < 1e-6:
                continue
            azimuths.append(np.arctan2(np.dot(transverse, w), np.dot(transverse, u)))

        assert stats.kstest(azimuths, "uniform", args=(-np.pi, 2.0 * np.pi)).pvalue > 0.001

    def test_deterministic_for_seed(self, reactor_spectrum, constants):
        """Test that equal seeds give identical event sequences."""
        first = IBDEventSampler(reactor_spectrum, rng=np.random.default_rng(7), constants=constants)
        second = IBDEventSampler(reactor_spectrum, rng=np.random.default_rng(7), constants=constants)

        for a, b in zip(first.generate_events(20), second.generate_events(20)):
            assert a == b

    def test_different_seeds_differ(self, reactor_spectrum, constants):
        """Test that events from different seeds compare unequal."""
        first = IBDEventSampler(reactor_spectrum, rng=np.random.default_rng(7), constants=constants)
        second = IBDEventSampler(reactor_spectrum, rng=np.random.default_rng(8), constants=constants)

        assert first.generate_event() != second.generate_event()

    def test_seed_from_config(self, reactor_spectrum, constants):
        """Test that the config seed is used when no generator is injected."""
        config = SamplingConfig(seed=3)
        first = IBDEventSampler(reactor_spectrum, constants=constants, config=config)
        second = IBDEventSampler(reactor_spectrum, constants=constants, config=config)

        assert first.generate_event().neutrino.energy == second.generate_event().neutrino.energy

    def test_legacy_strategy_runs(self, reactor_spectrum, rng, constants):
        """Test event generation with the legacy envelope."""
        config = SamplingConfig(envelope_strategy=EnvelopeStrategy.LEGACY)
        sampler = IBDEventSampler(reactor_spectrum, rng=rng, constants=constants, config=config)

        events = list(sampler.generate_events(20))
        assert len(events) == 20
        assert sampler.envelope == pytest.approx(
            cross_section(reactor_spectrum.e_max, -1.0, constants) * reactor_spectrum.flux_max
        )
