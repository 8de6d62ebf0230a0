"""Generator Configuration - Single Source of Truth (SSOT)

This module provides the central configuration dataclasses for the event generator.
ALL generator parameters must flow through these configuration classes.

Import Policy:
    from ibdgen.config.generator_config import GeneratorConfig, SamplingConfig, DetectorConfig

DO NOT use: from ibdgen.config.generator_config import *
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from ibdgen.config.defaults import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_ENVELOPE_N_COS,
    DEFAULT_ENVELOPE_N_ENERGY,
    DEFAULT_ENVELOPE_SAFETY_FACTOR,
    DEFAULT_ENVELOPE_STRATEGY,
    DEFAULT_HALF_X,
    DEFAULT_HALF_Y,
    DEFAULT_HALF_Z,
    DEFAULT_MAX_TRIALS,
    DEFAULT_SEED,
)
from ibdgen.config.enums import EnvelopeStrategy
from ibdgen.config.yaml_loader import get_default, load_yaml_file


@dataclass
class SpectrumConfig:
    """Antineutrino flux spectrum source.

    Attributes:
        path: Two-column text file of (energy [MeV], flux) rows

    """

    path: Optional[str] = field(default_factory=lambda: get_default("spectrum.path"))

    def validate(self) -> list[str]:
        errors = []
        if self.path is None:
            errors.append("spectrum.path must be set")
        return errors


@dataclass
class SamplingConfig:
    """Rejection sampling configuration.

    Attributes:
        envelope_strategy: How the upper bound on flux x cross-section is built
        safety_factor: Multiplier on the grid maximum (GRID strategy only)
        n_energy: Energies in the envelope scan
        n_cos: Scattering cosines in the envelope scan
        batch_size: Candidates drawn per numpy batch
        max_trials: Candidate cap per interaction before giving up
        seed: Seed for numpy.random.default_rng (None = OS entropy)

    """

    # SSOT: defaults.yaml, falling back to ibdgen.config.defaults
    envelope_strategy: EnvelopeStrategy = field(default_factory=lambda: EnvelopeStrategy(
        get_default("sampling.envelope_strategy", DEFAULT_ENVELOPE_STRATEGY)))
    safety_factor: float = field(default_factory=lambda: get_default(
        "sampling.safety_factor", DEFAULT_ENVELOPE_SAFETY_FACTOR))
    n_energy: int = field(default_factory=lambda: get_default(
        "sampling.n_energy", DEFAULT_ENVELOPE_N_ENERGY))
    n_cos: int = field(default_factory=lambda: get_default(
        "sampling.n_cos", DEFAULT_ENVELOPE_N_COS))
    batch_size: int = field(default_factory=lambda: get_default(
        "sampling.batch_size", DEFAULT_BATCH_SIZE))
    max_trials: int = field(default_factory=lambda: get_default(
        "sampling.max_trials", DEFAULT_MAX_TRIALS))
    seed: Optional[int] = field(default_factory=lambda: get_default(
        "sampling.seed", DEFAULT_SEED))

    def validate(self) -> list[str]:
        """Validate sampling configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        if not isinstance(self.envelope_strategy, EnvelopeStrategy):
            errors.append(
                f"envelope_strategy must be an EnvelopeStrategy, got {self.envelope_strategy!r}",
            )
        if self.safety_factor < 1.0:
            errors.append(
                f"safety_factor ({self.safety_factor}) must be >= 1.0, "
                "otherwise the envelope undercuts its own grid maximum",
            )
        if self.n_energy < 2:
            errors.append(f"n_energy must be >= 2, got {self.n_energy}")
        if self.n_cos < 2:
            errors.append(f"n_cos must be >= 2, got {self.n_cos}")
        if self.batch_size <= 0:
            errors.append(f"batch_size must be > 0, got {self.batch_size}")
        if self.max_trials <= 0:
            errors.append(f"max_trials must be > 0, got {self.max_trials}")
        if self.seed is not None and self.seed < 0:
            errors.append(f"seed must be non-negative, got {self.seed}")

        return errors


@dataclass
class DetectorConfig:
    """Rectangular detector bounding box.

    Attributes:
        half_x, half_y, half_z: Half-lengths along each axis (mm)

    """

    half_x: float = field(default_factory=lambda: get_default("detector.half_x", DEFAULT_HALF_X))
    half_y: float = field(default_factory=lambda: get_default("detector.half_y", DEFAULT_HALF_Y))
    half_z: float = field(default_factory=lambda: get_default("detector.half_z", DEFAULT_HALF_Z))

    def validate(self) -> list[str]:
        errors = []
        for name in ("half_x", "half_y", "half_z"):
            value = getattr(self, name)
            if value < 0:
                errors.append(f"{name} must be >= 0, got {value}")
        return errors


@dataclass
class GeneratorConfig:
    """Complete generator configuration (SSOT).

    Example:
        >>> config = GeneratorConfig(spectrum=SpectrumConfig(path="reactor.dat"))
        >>> errors = config.validate()
        >>> if not errors:
        ...     generator = create_generator(config)

    Attributes:
        spectrum: Flux spectrum source
        sampling: Rejection sampling parameters
        detector: Detector bounding box

    """

    spectrum: SpectrumConfig = field(default_factory=SpectrumConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)

    def validate(self) -> list[str]:
        """Validate all sub-configurations.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []
        errors.extend(self.spectrum.validate())
        errors.extend(self.sampling.validate())
        errors.extend(self.detector.validate())
        return errors

    def to_dict(self) -> dict:
        """Convert configuration to a plain dictionary (enums as strings)."""
        config_dict = asdict(self)
        config_dict["sampling"]["envelope_strategy"] = self.sampling.envelope_strategy.value
        return config_dict

    @classmethod
    def from_dict(cls, data: dict) -> GeneratorConfig:
        """Create configuration from dictionary.

        Missing keys fall back to defaults.yaml, then ibdgen.config.defaults.

        Args:
            data: Dictionary representation of configuration

        Returns:
            GeneratorConfig instance

        Raises:
            ValueError: If envelope_strategy is not a known strategy name.

        """
        spectrum_data = data.get("spectrum") or {}
        sampling_data = data.get("sampling") or {}
        detector_data = data.get("detector") or {}

        # Missing keys keep the dataclass defaults (defaults.yaml)
        sampling_base = SamplingConfig()
        detector_base = DetectorConfig()

        strategy = sampling_data.get("envelope_strategy", sampling_base.envelope_strategy)
        if isinstance(strategy, str):
            strategy = EnvelopeStrategy(strategy.lower())

        spectrum = SpectrumConfig(path=spectrum_data.get("path"))

        sampling = SamplingConfig(
            envelope_strategy=strategy,
            safety_factor=float(sampling_data.get("safety_factor", sampling_base.safety_factor)),
            n_energy=int(sampling_data.get("n_energy", sampling_base.n_energy)),
            n_cos=int(sampling_data.get("n_cos", sampling_base.n_cos)),
            batch_size=int(sampling_data.get("batch_size", sampling_base.batch_size)),
            max_trials=int(sampling_data.get("max_trials", sampling_base.max_trials)),
            seed=sampling_data.get("seed", sampling_base.seed),
        )

        detector = DetectorConfig(
            half_x=float(detector_data.get("half_x", detector_base.half_x)),
            half_y=float(detector_data.get("half_y", detector_base.half_y)),
            half_z=float(detector_data.get("half_z", detector_base.half_z)),
        )

        return cls(spectrum=spectrum, sampling=sampling, detector=detector)


def load_config(path: str | Path) -> GeneratorConfig:
    """Read a GeneratorConfig from a YAML file.

    A relative spectrum path is resolved against the YAML file's directory.

    Args:
        path: YAML file laid out like defaults.yaml

    Returns:
        GeneratorConfig (not yet validated)

    """
    path = Path(path)
    config = GeneratorConfig.from_dict(load_yaml_file(path))

    spectrum_path = config.spectrum.path
    if spectrum_path is not None and not Path(spectrum_path).is_absolute():
        config.spectrum.path = str(path.parent / spectrum_path)

    return config


def create_default_config(spectrum_path: Optional[str] = None) -> GeneratorConfig:
    """Create a default generator configuration.

    Args:
        spectrum_path: Flux spectrum file. If None, spectrum.path from
            defaults.yaml is used.

    Returns:
        GeneratorConfig with defaults from the SSOT

    """
    config = GeneratorConfig()
    if spectrum_path is not None:
        config.spectrum.path = spectrum_path
    return config
