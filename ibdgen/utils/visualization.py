"""Simple visualization utilities for spectra and generated events."""

from typing import Sequence

import numpy as np
import matplotlib.pyplot as plt

from ibdgen.core.constants import DEFAULT_CONSTANTS, PhysicsConstants
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.physics.cross_section import total_cross_section_array
from ibdgen.sampling.event_sampler import IBDEvent

# mm² → cm²
MM2_TO_CM2 = 1.0e-2


def plot_spectrum(
    spectrum: SpectrumTable,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
    title: str = 'IBD Spectrum',
    save_path: str = None,
):
    """Plot flux, total cross-section and their product (detected spectrum).

    Args:
        spectrum: Antineutrino flux spectrum
        constants: Physics constants
        title: Plot title
        save_path: If provided, save to file
    """
    energies = np.linspace(spectrum.e_min, spectrum.e_max, 500)
    flux = spectrum.interpolate_array(energies)
    sigma = total_cross_section_array(energies, constants) * MM2_TO_CM2

    fig, axes = plt.subplots(1, 3, figsize=(15, 4))

    axes[0].plot(energies, flux, linewidth=2)
    axes[0].set_ylabel('Flux [a.u.]')
    axes[0].set_title('Flux')

    axes[1].plot(energies, sigma, linewidth=2, color='tab:orange')
    axes[1].axvline(constants.ibd_threshold, linestyle='--', color='gray', label='threshold')
    axes[1].set_ylabel('σ [cm²]')
    axes[1].set_title('IBD cross-section')
    axes[1].legend()

    axes[2].plot(energies, flux * sigma, linewidth=2, color='tab:green')
    axes[2].set_ylabel('Flux × σ [a.u.]')
    axes[2].set_title('Interaction spectrum')

    for ax in axes:
        ax.set_xlabel('Eν [MeV]')
        ax.grid(True, alpha=0.3)

    fig.suptitle(title)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved: {save_path}")
    else:
        plt.show()

    plt.close()


def plot_event_distributions(
    events: Sequence[IBDEvent],
    title: str = 'Generated IBD Events',
    bins: int = 50,
    save_path: str = None,
):
    """Histogram Eν, cosθ and the positron / neutron kinetic energies.

    Args:
        events: Generated events
        title: Plot title
        bins: Histogram bins
        save_path: If provided, save to file
    """
    e_nu = np.array([ev.neutrino.energy for ev in events])
    cos_theta = np.array([ev.cos_theta for ev in events])
    t_pos = np.array([ev.positron.kinetic_energy() for ev in events])
    t_neu = np.array([ev.neutron.kinetic_energy() for ev in events]) * 1e3

    fig, axes = plt.subplots(2, 2, figsize=(10, 8))

    panels = [
        (axes[0, 0], e_nu, 'Eν [MeV]'),
        (axes[0, 1], cos_theta, 'cosθ (e⁺ vs ν̄)'),
        (axes[1, 0], t_pos, 'e⁺ kinetic energy [MeV]'),
        (axes[1, 1], t_neu, 'n kinetic energy [keV]'),
    ]
    for ax, values, label in panels:
        ax.hist(values, bins=bins, histtype='step', linewidth=2)
        ax.set_xlabel(label)
        ax.set_ylabel('Events')
        ax.grid(True, alpha=0.3)

    fig.suptitle(f"{title} (N={len(events)})")
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved: {save_path}")
    else:
        plt.show()

    plt.close()
