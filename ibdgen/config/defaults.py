"""
Default Configuration Constants for the IBD Event Generator

This module contains ALL default values used throughout the generator.
This is the Single Source of Truth (SSOT) for default configuration.

IMPORTANT Import Policies:
    1. DO NOT use: from ibdgen.config.defaults import *
       This causes namespace pollution and makes tracking difficult.

    2. DO use explicit imports:
       from ibdgen.config.defaults import DEFAULT_MAX_TRIALS, DEFAULT_BATCH_SIZE

    3. DO NOT define defaults elsewhere. All defaults must be in this file.
"""

# =============================================================================
# Rejection Sampling Defaults
# =============================================================================

# How the rejection envelope is built ("grid" or "legacy")
# "grid" scans the flux x cross-section product, "legacy" uses
# cross_section(e_max, -1) * flux_max.
DEFAULT_ENVELOPE_STRATEGY = "grid"

# Multiplier applied to the grid maximum of flux x cross-section.
# Must be >= 1. Covers maxima that fall between grid points.
DEFAULT_ENVELOPE_SAFETY_FACTOR = 1.05

# Number of energies in the envelope scan (table nodes are always added)
DEFAULT_ENVELOPE_N_ENERGY = 400

# Number of scattering cosines in the envelope scan, including -1 and +1
DEFAULT_ENVELOPE_N_COS = 81

# Candidates drawn per numpy batch in the rejection loop
DEFAULT_BATCH_SIZE = 256

# Hard cap on candidate trials for a single interaction.
# Reaching it raises SamplingEnvelopeError instead of looping forever.
DEFAULT_MAX_TRIALS = 1_000_000

# Random seed (None = fresh entropy from the OS)
DEFAULT_SEED = None

# =============================================================================
# Detector Defaults
# =============================================================================

# Half-lengths of the detector bounding box [mm]
DEFAULT_HALF_X = 1000.0
DEFAULT_HALF_Y = 1000.0
DEFAULT_HALF_Z = 1000.0

# =============================================================================
# Spectrum Defaults
# =============================================================================

# Comment marker accepted in spectrum files
SPECTRUM_COMMENT_CHAR = "#"

# Minimum number of (energy, flux) points in a spectrum table
MIN_SPECTRUM_POINTS = 2

# =============================================================================
# Warning Thresholds
# =============================================================================

# Envelope scans coarser than this may miss the maximum of the product
WARN_MIN_ENVELOPE_N_ENERGY = 50
WARN_MIN_ENVELOPE_N_COS = 11

# A safety factor above this wastes trials without improving correctness
WARN_MAX_ENVELOPE_SAFETY_FACTOR = 2.0
