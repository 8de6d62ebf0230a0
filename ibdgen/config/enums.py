"""
Configuration Enums for the IBD Event Generator

Import Policy:
    from ibdgen.config.enums import EnvelopeStrategy

DO NOT use: from ibdgen.config.enums import *
"""

from enum import Enum


class EnvelopeStrategy(Enum):
    """How the rejection-sampling upper bound is constructed.

    Options:
        GRID: Maximum of flux(E) x dsigma/dcos(E, cos) over a fine (E, cos) grid,
            times a safety factor (default, production)
        LEGACY: dsigma/dcos(E_max, -1) x max(flux). Both factors are maximized
            independently and at fixed points, so the product is not guaranteed
            to dominate the target density.

    Note:
        LEGACY is kept for comparison with older event samples. Violations of
        the bound are detected at runtime and logged.
    """
    GRID = "grid"
    LEGACY = "legacy"
