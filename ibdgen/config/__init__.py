"""Configuration Module - Single Source of Truth for Generator Parameters

Default Configuration (loaded from defaults.yaml):
    from ibdgen.config import get_default, get_defaults

    max_trials = get_default('sampling.max_trials')
    all_defaults = get_defaults()

Recommended Usage:
    from ibdgen.config import create_validated_config

    config = create_validated_config(path="reactor.dat", seed=1234)

    # Or from a YAML file laid out like defaults.yaml
    from ibdgen.config import load_config, validate_config
    config = load_config("run.yaml")
    validate_config(config)

Import Policy:
    DO NOT use: from ibdgen.config import *

Submodules:
    enums: Configuration enumerations (EnvelopeStrategy)
    yaml_loader: YAML configuration loader (get_default, get_defaults)
    generator_config: Configuration dataclasses (SamplingConfig, DetectorConfig, ...)
    validation: Validation utilities (validate_config, warn_if_unsafe, ...)
"""

from ibdgen.config.enums import EnvelopeStrategy
# Import YAML loader functions first (no circular dependencies)
from ibdgen.config.yaml_loader import get_default, get_defaults, reload_defaults
from ibdgen.config.generator_config import (
    DetectorConfig,
    GeneratorConfig,
    SamplingConfig,
    SpectrumConfig,
    create_default_config,
    load_config,
)
from ibdgen.config.validation import (
    ConfigurationError,
    ConfigurationWarning,
    create_validated_config,
    validate_and_warn,
    validate_config,
    warn_if_unsafe,
)


__all__ = [
    # Enums
    "EnvelopeStrategy",
    # Config classes
    "SpectrumConfig",
    "SamplingConfig",
    "DetectorConfig",
    "GeneratorConfig",
    # Factory functions
    "create_default_config",
    "create_validated_config",
    "load_config",
    # Validation
    "ConfigurationError",
    "ConfigurationWarning",
    "validate_config",
    "validate_and_warn",
    "warn_if_unsafe",
    # YAML defaults access
    "get_default",
    "get_defaults",
    "reload_defaults",
]
