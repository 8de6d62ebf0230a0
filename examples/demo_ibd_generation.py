"""Demo script for IBD event generation.

Demonstrates complete workflow: spectrum creation, envelope check,
event and vertex generation, and visualization.
"""

import tempfile
from pathlib import Path

import numpy as np

from ibdgen import create_generator, create_validated_config, validate_envelope
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.utils import plot_event_distributions, plot_spectrum


def reactor_flux(energy):
    """Exponential-polynomial fit to a U-235 antineutrino spectrum."""
    return np.exp(
        3.217 - 3.111 * energy + 1.395 * energy**2 - 0.3690 * energy**3
        + 0.04445 * energy**4 - 0.002053 * energy**5
    )


def main():
    """Run demonstration generation."""
    print("Inverse Beta Decay Event Generation Demo")
    print("=" * 50)

    # 1. Write spectrum file
    print("\n[1] Writing spectrum...")
    workdir = Path(tempfile.mkdtemp(prefix="ibdgen_"))
    spectrum_path = workdir / "reactor.dat"
    energies = np.linspace(1.8, 10.0, 83)
    with open(spectrum_path, "w") as f:
        f.write("# energy [MeV]  flux [a.u.]\n")
        for e, phi in zip(energies, reactor_flux(energies)):
            f.write(f"{e:.4f} {phi:.6e}\n")
    print(f"  File: {spectrum_path}")

    # 2. Configure and build generator
    print("\n[2] Creating generator...")
    config = create_validated_config(
        path=str(spectrum_path),
        seed=2024,
        half_x=1500.0,
        half_y=1500.0,
        half_z=2000.0,
    )
    generator = create_generator(config)
    spectrum = generator.spectrum
    print(f"  Spectrum: {spectrum!r}")
    print(f"  Envelope: {generator.event_sampler.envelope:.4e}")

    # 3. Check envelope
    print("\n[3] Checking envelope...")
    report = validate_envelope(spectrum, generator.event_sampler.envelope)
    print(f"  Max density / bound: {report.max_ratio:.4f}")
    print(f"  Dominates: {report.dominates}")

    # 4. Generate events
    print("\n[4] Generating events...")
    n_events = 5000
    events = []
    vertices = np.empty((n_events, 3))
    for i, (event, vertex) in enumerate(generator.generate_many(n_events)):
        events.append(event)
        vertices[i] = vertex

    stats = generator.statistics
    cos_theta = np.array([ev.cos_theta for ev in events])
    print(f"  Events: {len(events)}")
    print(f"  Acceptance: {stats.acceptance_rate:.2%}")
    print(f"  <cosθ>: {cos_theta.mean():+.4f}")
    print(f"  Vertex z range: [{vertices[:, 2].min():.1f}, {vertices[:, 2].max():.1f}] mm")

    # 5. Visualization
    print("\n[5] Generating plots...")
    plot_spectrum(SpectrumTable.load(spectrum_path), save_path=str(workdir / "spectrum.png"))
    plot_event_distributions(events, save_path=str(workdir / "events.png"))

    print("\n" + "=" * 50)
    print("Demo complete!")


if __name__ == "__main__":
    main()
