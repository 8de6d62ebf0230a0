"""
Configuration Validation Utilities

This module provides validation functions for generator configurations.

Import Policy:
    from ibdgen.config.validation import validate_config, warn_if_unsafe, ConfigurationError

DO NOT use: from ibdgen.config.validation import *
"""

import warnings
from typing import List, Tuple

from ibdgen.config.defaults import (
    WARN_MAX_ENVELOPE_SAFETY_FACTOR,
    WARN_MIN_ENVELOPE_N_COS,
    WARN_MIN_ENVELOPE_N_ENERGY,
)
from ibdgen.config.enums import EnvelopeStrategy
from ibdgen.config.generator_config import GeneratorConfig


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigurationWarning(Warning):
    """Warning for potentially unsafe configuration choices."""

    pass


def validate_config(config: GeneratorConfig, raise_on_error: bool = True) -> Tuple[bool, List[str]]:
    """Validate a generator configuration.

    Args:
        config: GeneratorConfig to validate
        raise_on_error: If True, raise ConfigurationError on validation failure

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        ConfigurationError: If validation fails and raise_on_error=True
    """
    errors = config.validate()

    if errors:
        if raise_on_error:
            raise ConfigurationError(
                f"Configuration validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {err}" for err in errors)
            )
        return False, errors

    return True, []


def warn_if_unsafe(config: GeneratorConfig) -> List[str]:
    """Check for potentially unsafe configuration choices.

    These are not errors, but choices that may lead to biased samples
    or wasted trials. Warnings are issued via Python's warnings module.

    Args:
        config: GeneratorConfig to check

    Returns:
        List of warning messages (empty if no warnings)
    """
    warnings_list = []
    sampling = config.sampling

    # Check 1: legacy envelope is not a proven bound
    if sampling.envelope_strategy == EnvelopeStrategy.LEGACY:
        warnings_list.append(
            "envelope_strategy=LEGACY does not guarantee an upper bound on "
            "flux x cross-section. Events may be biased where the bound is exceeded."
        )

    # Check 2: coarse envelope scan
    if sampling.envelope_strategy == EnvelopeStrategy.GRID:
        if sampling.n_energy < WARN_MIN_ENVELOPE_N_ENERGY:
            warnings_list.append(
                f"n_energy ({sampling.n_energy}) is small. The envelope scan may miss "
                "the maximum of flux x cross-section."
            )
        if sampling.n_cos < WARN_MIN_ENVELOPE_N_COS:
            warnings_list.append(
                f"n_cos ({sampling.n_cos}) is small. The envelope scan may miss "
                "the maximum of flux x cross-section."
            )

    # Check 3: wasteful safety factor
    if sampling.safety_factor > WARN_MAX_ENVELOPE_SAFETY_FACTOR:
        warnings_list.append(
            f"safety_factor ({sampling.safety_factor}) is large. Acceptance drops "
            "proportionally without making the bound more correct."
        )

    # Check 4: degenerate detector
    detector = config.detector
    if min(detector.half_x, detector.half_y, detector.half_z) == 0:
        warnings_list.append(
            "A detector half-dimension is zero. All vertices will lie on a plane."
        )

    for warning_msg in warnings_list:
        warnings.warn(warning_msg, ConfigurationWarning, stacklevel=2)

    return warnings_list


def validate_and_warn(config: GeneratorConfig) -> GeneratorConfig:
    """Validate a configuration and issue warnings for unsafe choices.

    Raises:
        ConfigurationError: If validation fails
    """
    validate_config(config)
    warn_if_unsafe(config)
    return config


def create_validated_config(**kwargs) -> GeneratorConfig:
    """Create a generator configuration with validation.

    Args:
        **kwargs: Parameters to override in default config, matched by name
            against the spectrum, sampling and detector sections

    Returns:
        Validated GeneratorConfig

    Raises:
        ConfigurationError: If the resulting configuration is invalid
        ValueError: If a parameter name is unknown

    Example:
        >>> config = create_validated_config(path="reactor.dat", seed=42, half_z=500.0)
    """
    from ibdgen.config.generator_config import create_default_config

    config = create_default_config()

    for key, value in kwargs.items():
        if hasattr(config.spectrum, key):
            setattr(config.spectrum, key, value)
        elif hasattr(config.sampling, key):
            if key == "envelope_strategy" and isinstance(value, str):
                value = EnvelopeStrategy(value.lower())
            setattr(config.sampling, key, value)
        elif hasattr(config.detector, key):
            setattr(config.detector, key, value)
        else:
            raise ValueError(f"Unknown configuration parameter: {key}")

    return validate_and_warn(config)
