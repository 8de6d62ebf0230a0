"""Antineutrino flux spectrum table.

This module provides the spectrum lookup table used to weight candidate
interactions: an ordered (energy, flux) table loaded once from a two-column
text file and interpolated linearly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np

from ibdgen.config.defaults import MIN_SPECTRUM_POINTS, SPECTRUM_COMMENT_CHAR
from ibdgen.config.validation import ConfigurationError
from ibdgen.config.yaml_loader import get_default

logger = logging.getLogger(__name__)


class SpectrumLoadError(OSError):
    """Raised when a spectrum file cannot be opened or read."""

    pass


class SpectrumFormatError(ConfigurationError):
    """Raised when spectrum data violates the table invariants."""

    pass


class SpectrumTable:
    """Flux spectrum Φ(E) with linear interpolation.

    The table is immutable after construction: both arrays are stored
    read-only so one table can be shared between several samplers.

    Attributes:
        energy: Antineutrino energies [MeV] (strictly increasing)
        flux: Flux values at each energy (arbitrary positive units)
    """

    def __init__(self, energy: np.ndarray, flux: np.ndarray):
        """Initialize the spectrum table.

        Args:
            energy: Energy values [MeV] in strictly increasing order.
                The table is never re-sorted.
            flux: Flux values at each energy, non-negative.

        Raises:
            SpectrumFormatError: If arrays are not 1D, have mismatched lengths,
                hold fewer than 2 points, contain non-finite or negative values,
                or if energy is not strictly increasing.
        """
        energy = np.array(energy, dtype=np.float64)
        flux = np.array(flux, dtype=np.float64)

        if energy.ndim != 1:
            raise SpectrumFormatError(f"energy must be 1D array, got shape {energy.shape}")

        if flux.ndim != 1:
            raise SpectrumFormatError(f"flux must be 1D array, got shape {flux.shape}")

        if len(energy) != len(flux):
            raise SpectrumFormatError(
                f"energy and flux must have same length: {len(energy)} != {len(flux)}"
            )

        if len(energy) < MIN_SPECTRUM_POINTS:
            raise SpectrumFormatError(
                f"spectrum needs at least {MIN_SPECTRUM_POINTS} points, got {len(energy)}"
            )

        if not (np.all(np.isfinite(energy)) and np.all(np.isfinite(flux))):
            raise SpectrumFormatError("spectrum contains non-finite values")

        if np.any(energy < 0) or np.any(flux < 0):
            raise SpectrumFormatError("energy and flux values must be non-negative")

        # Check monotonic increase
        if not np.all(np.diff(energy) > 0):
            raise SpectrumFormatError("energy must be strictly monotonically increasing")

        energy.setflags(write=False)
        flux.setflags(write=False)
        self._energy = energy
        self._flux = flux

    @classmethod
    def load(cls, source: Union[str, Path]) -> SpectrumTable:
        """Load a spectrum from a whitespace-separated two-column text file.

        Each row holds exactly ``<energy_MeV> <flux>``. Rows are kept in file order.
        Blank lines and comments (``spectrum.comment_char``, ``#`` by default)
        are skipped.

        Args:
            source: Path to the spectrum file

        Returns:
            SpectrumTable

        Raises:
            SpectrumLoadError: If the file cannot be opened. This is a
                configuration-time failure and is not meant to be recovered.
            SpectrumFormatError: If a row does not have two numeric columns
                or the table is not a valid spectrum.
        """
        path = Path(source)
        try:
            with open(path, encoding="utf-8") as f:
                lines = f.readlines()
        except OSError as e:
            raise SpectrumLoadError(f"Error opening spectrum file {path}: {e}") from e

        comment_char = get_default("spectrum.comment_char", SPECTRUM_COMMENT_CHAR)
        energy = []
        flux = []
        for lineno, line in enumerate(lines, start=1):
            tokens = line.split(comment_char, 1)[0].split()
            if not tokens:
                continue
            if len(tokens) != 2:
                raise SpectrumFormatError(
                    f"{path}:{lineno}: expected 2 columns (energy, flux), "
                    f"got {len(tokens)}: {line.strip()!r}"
                )
            try:
                e_value, phi_value = float(tokens[0]), float(tokens[1])
            except ValueError as e:
                raise SpectrumFormatError(
                    f"{path}:{lineno}: non-numeric spectrum entry: {line.strip()!r}"
                ) from e
            energy.append(e_value)
            flux.append(phi_value)

        table = cls(energy, flux)

        logger.info(
            f"Loaded spectrum {path}: {len(table)} points, "
            f"{table.e_min:.3f} - {table.e_max:.3f} MeV"
        )
        return table

    @property
    def energy(self) -> np.ndarray:
        return self._energy

    @property
    def flux(self) -> np.ndarray:
        return self._flux

    @property
    def e_min(self) -> float:
        """First (lowest) table energy [MeV]."""
        return float(self._energy[0])

    @property
    def e_max(self) -> float:
        """Last (highest) table energy [MeV]."""
        return float(self._energy[-1])

    @property
    def flux_max(self) -> float:
        """Largest flux value in the table."""
        return float(np.max(self._flux))

    def interpolate(self, energy: float) -> float:
        """Get the flux at given energy via linear interpolation.

        The bracket is the first table energy >= ``energy`` and its
        predecessor. Above the table the last flux is returned unchanged.
        Below the table the first segment is extended linearly, which can
        yield negative values; the sampler only queries inside the table.

        Args:
            energy: Antineutrino energy [MeV]

        Returns:
            Flux at the given energy. Exact at table nodes.

        Examples:
            >>> table = SpectrumTable([2.0, 4.0], [1.0, 3.0])
            >>> table.interpolate(3.0)
            2.0
            >>> table.interpolate(10.0)
            3.0
        """
        idx = int(np.searchsorted(self._energy, energy, side="left"))

        if idx == len(self._energy):
            return float(self._flux[-1])

        if self._energy[idx] == energy:
            return float(self._flux[idx])

        # Below the first node the first segment is used
        idx = max(idx, 1)

        E0 = self._energy[idx - 1]
        E1 = self._energy[idx]
        F0 = self._flux[idx - 1]
        F1 = self._flux[idx]

        # Linear interpolation: F(E) = F0 + (F1 - F0) * (E - E0) / (E1 - E0)
        return float(F0 + (F1 - F0) * (energy - E0) / (E1 - E0))

    def interpolate_array(self, energies: np.ndarray) -> np.ndarray:
        """Get fluxes for an array of energies.

        Same semantics as :meth:`interpolate`, element-wise.

        Args:
            energies: Antineutrino energies [MeV]

        Returns:
            Flux at each energy, same shape as ``energies``.
        """
        energies = np.asarray(energies, dtype=np.float64)
        n = len(self._energy)

        idx = np.searchsorted(self._energy, energies, side="left")
        above_mask = idx == n
        seg = np.clip(idx, 1, n - 1)

        E0 = self._energy[seg - 1]
        E1 = self._energy[seg]
        F0 = self._flux[seg - 1]
        F1 = self._flux[seg]

        result = F0 + (F1 - F0) * (energies - E0) / (E1 - E0)

        # Exact values on the nodes
        node_mask = ~above_mask & (self._energy[np.minimum(idx, n - 1)] == energies)
        result = np.where(node_mask, self._flux[np.minimum(idx, n - 1)], result)

        return np.where(above_mask, self._flux[-1], result)

    def __len__(self) -> int:
        """Return number of table points."""
        return len(self._energy)

    def __repr__(self) -> str:
        return (
            f"SpectrumTable(energy_range=[{self.e_min:.3f}, {self.e_max:.3f}] MeV, "
            f"num_points={len(self)}, flux_max={self.flux_max:.4g})"
        )
