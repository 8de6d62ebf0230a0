"""Pytest configuration and shared fixtures for ibdgen tests."""

import pytest
import numpy as np
import yaml

from ibdgen.config.generator_config import SamplingConfig
from ibdgen.config.yaml_loader import DEFAULTS_ENV_VAR, reload_defaults
from ibdgen.core.constants import PhysicsConstants
from ibdgen.core.geometry import BoxDetector
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.sampling.event_sampler import IBDEventSampler


def reactor_flux(energy):
    """Exponential-polynomial reactor antineutrino flux shape (U-235 like)."""
    e = np.asarray(energy, dtype=np.float64)
    return np.exp(
        3.217 - 3.111 * e + 1.395 * e**2 - 0.3690 * e**3
        + 0.04445 * e**4 - 0.002053 * e**5
    )


def write_spectrum(path, energy, flux, header=None):
    """Write a two-column spectrum file."""
    with open(path, "w") as f:
        if header:
            f.write(f"# {header}\n")
        for e, phi in zip(energy, flux):
            f.write(f"{e:.6f} {phi:.8e}\n")
    return path


# Fixtures for core modules


@pytest.fixture
def constants():
    """Default physics constants."""
    return PhysicsConstants()


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(20240611)


@pytest.fixture
def reactor_energies():
    """Energy grid of the reactor spectrum [MeV]."""
    return np.linspace(1.8, 10.0, 83)


@pytest.fixture
def reactor_spectrum(reactor_energies):
    """Reactor-like spectrum table."""
    return SpectrumTable(reactor_energies, reactor_flux(reactor_energies))


@pytest.fixture
def reactor_spectrum_file(tmp_path, reactor_energies):
    """Reactor-like spectrum written to disk."""
    return write_spectrum(
        tmp_path / "reactor.dat",
        reactor_energies,
        reactor_flux(reactor_energies),
        header="energy [MeV]  flux",
    )


@pytest.fixture
def two_point_spectrum():
    """Linear ramp from (1.8, 0) to (10, 1)."""
    return SpectrumTable([1.8, 10.0], [0.0, 1.0])


@pytest.fixture
def small_spectrum():
    """Three-point spectrum with simple numbers."""
    return SpectrumTable([2.0, 4.0, 8.0], [1.0, 3.0, 2.0])


@pytest.fixture
def detector():
    """Box detector with half-dimensions (1, 2, 3)."""
    return BoxDetector(half_x=1.0, half_y=2.0, half_z=3.0)


# Fixtures for samplers


@pytest.fixture
def sampling_config():
    """Default sampling configuration with a fixed seed."""
    return SamplingConfig(seed=12345)


@pytest.fixture
def sampler(reactor_spectrum, rng, constants, sampling_config):
    """Event sampler on the reactor spectrum."""
    return IBDEventSampler(reactor_spectrum, rng=rng, constants=constants, config=sampling_config)


@pytest.fixture
def events(sampler):
    """A few hundred generated events."""
    return list(sampler.generate_events(400))


# Fixtures for configuration


@pytest.fixture
def override_defaults(tmp_path, monkeypatch):
    """Point the defaults loader at a custom YAML file for one test."""

    def _override(data):
        path = tmp_path / "custom_defaults.yaml"
        path.write_text(yaml.safe_dump(data))
        monkeypatch.setenv(DEFAULTS_ENV_VAR, str(path))
        reload_defaults()
        return path

    yield _override

    monkeypatch.delenv(DEFAULTS_ENV_VAR, raising=False)
    reload_defaults()
