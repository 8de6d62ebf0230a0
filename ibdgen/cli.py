"""Command-line interface for IBD event generation.

Usage:
    python -m ibdgen.cli info --spectrum reactor.dat
    python -m ibdgen.cli generate --spectrum reactor.dat -n 10000 --seed 1
    python -m ibdgen.cli generate --config run.yaml --plot events.png
    python -m ibdgen.cli envelope --spectrum reactor.dat
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from ibdgen.config.enums import EnvelopeStrategy
from ibdgen.config.generator_config import GeneratorConfig, create_default_config, load_config
from ibdgen.config.validation import ConfigurationError, validate_config
from ibdgen.core.constants import DEFAULT_CONSTANTS
from ibdgen.core.spectrum import SpectrumTable
from ibdgen.generator import create_generator
from ibdgen.physics.cross_section import total_cross_section
from ibdgen.sampling.envelope import SamplingEnvelopeError, compute_envelope, validate_envelope

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Config file (if any) overridden by explicit command-line options."""
    if getattr(args, "config", None):
        config = load_config(args.config)
    else:
        config = create_default_config()

    if getattr(args, "spectrum", None):
        config.spectrum.path = args.spectrum
    if getattr(args, "seed", None) is not None:
        config.sampling.seed = args.seed
    if getattr(args, "envelope", None):
        config.sampling.envelope_strategy = EnvelopeStrategy(args.envelope)
    if getattr(args, "max_trials", None) is not None:
        config.sampling.max_trials = args.max_trials
    if getattr(args, "half_dims", None):
        config.detector.half_x, config.detector.half_y, config.detector.half_z = args.half_dims

    validate_config(config)
    return config


def cmd_info(args: argparse.Namespace) -> None:
    """Display spectrum, threshold and envelope information."""
    config = _build_config(args)
    spectrum = SpectrumTable.load(config.spectrum.path)
    constants = DEFAULT_CONSTANTS

    envelope = compute_envelope(
        spectrum,
        strategy=config.sampling.envelope_strategy,
        constants=constants,
        safety_factor=config.sampling.safety_factor,
        n_energy=config.sampling.n_energy,
        n_cos=config.sampling.n_cos,
    )

    print("\n" + "=" * 60)
    print("IBD GENERATOR INFORMATION")
    print("=" * 60)

    print("\n[Spectrum]")
    print(f"  File:          {config.spectrum.path}")
    print(f"  Points:        {len(spectrum)}")
    print(f"  Energy range:  {spectrum.e_min:.3f} - {spectrum.e_max:.3f} MeV")
    print(f"  Max flux:      {spectrum.flux_max:.6g}")

    print("\n[Physics]")
    print(f"  IBD threshold: {constants.ibd_threshold:.4f} MeV")
    print(f"  Δ = mn - mp:   {constants.delta:.5f} MeV")
    sigma_max = total_cross_section(spectrum.e_max, constants) * 1e-2
    print(f"  σ(E_max):      {sigma_max:.4e} cm²")

    print("\n[Sampling]")
    print(f"  Envelope:      {config.sampling.envelope_strategy.value} = {envelope:.6g}")
    print(f"  Max trials:    {config.sampling.max_trials}")

    print("\n" + "=" * 60)


def cmd_generate(args: argparse.Namespace) -> None:
    """Generate events and log summary statistics."""
    config = _build_config(args)
    generator = create_generator(config)

    logger.info(f"Generating {args.n_events} events...")

    events = []
    vertices = np.empty((args.n_events, 3))
    for i, (event, vertex) in enumerate(generator.generate_many(args.n_events)):
        events.append(event)
        vertices[i] = vertex

    e_nu = np.array([ev.neutrino.energy for ev in events])
    e_pos = np.array([ev.positron.energy for ev in events])
    t_neu = np.array([ev.neutron.kinetic_energy() for ev in events])
    cos_theta = np.array([ev.cos_theta for ev in events])

    stats = generator.statistics
    logger.info(
        f"Generated {len(events)} events: <Eν> = {e_nu.mean():.3f} MeV, "
        f"<Ee+> = {e_pos.mean():.3f} MeV, <Tn> = {t_neu.mean() * 1e3:.2f} keV, "
        f"<cosθ> = {cos_theta.mean():+.4f}"
    )
    logger.info(
        f"Rejection sampling: {stats.n_trials} trials, "
        f"acceptance {stats.acceptance_rate:.3%}, "
        f"envelope violations {stats.envelope_violations}"
    )
    logger.info(
        f"Vertex extent: x [{vertices[:, 0].min():.1f}, {vertices[:, 0].max():.1f}], "
        f"y [{vertices[:, 1].min():.1f}, {vertices[:, 1].max():.1f}], "
        f"z [{vertices[:, 2].min():.1f}, {vertices[:, 2].max():.1f}] mm"
    )

    if args.plot:
        from ibdgen.utils.visualization import plot_event_distributions

        plot_event_distributions(events, save_path=args.plot)


def cmd_envelope(args: argparse.Namespace) -> None:
    """Compare the legacy and grid envelopes against a fine scan."""
    config = _build_config(args)
    spectrum = SpectrumTable.load(config.spectrum.path)

    for strategy in EnvelopeStrategy:
        try:
            bound = compute_envelope(
                spectrum,
                strategy=strategy,
                safety_factor=config.sampling.safety_factor,
                n_energy=config.sampling.n_energy,
                n_cos=config.sampling.n_cos,
            )
        except SamplingEnvelopeError as e:
            logger.error(f"{strategy.value}: {e}")
            continue

        report = validate_envelope(spectrum, bound)
        status = "OK" if report.dominates else "VIOLATED"
        logger.info(
            f"{strategy.value:>7s}: bound {report.bound:.6g}, scan max {report.grid_max:.6g}, "
            f"max ratio {report.max_ratio:.3f}, "
            f"violations {report.violation_fraction:.2%} [{status}]"
        )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--spectrum",
        help="Two-column spectrum file: energy [MeV], flux",
    )
    parser.add_argument(
        "--config",
        help="YAML configuration file (laid out like defaults.yaml)",
    )
    parser.add_argument(
        "--envelope",
        choices=[s.value for s in EnvelopeStrategy],
        help="Rejection envelope strategy (default: from configuration)",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Inverse beta decay event generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Inspect a spectrum
  python -m ibdgen.cli info --spectrum reactor.dat

  # Generate 10000 events in a 2 m x 2 m x 4 m box
  python -m ibdgen.cli generate --spectrum reactor.dat -n 10000 \\
      --half-dims 1000 1000 2000 --seed 7 --plot events.png

  # Check the rejection envelope
  python -m ibdgen.cli envelope --spectrum reactor.dat
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    info_parser = subparsers.add_parser("info", help="Show spectrum and sampling information")
    _add_common_arguments(info_parser)

    gen_parser = subparsers.add_parser("generate", help="Generate events")
    _add_common_arguments(gen_parser)
    gen_parser.add_argument(
        "-n", "--n-events",
        type=_positive_int,
        default=1000,
        help="Number of events (default: 1000)",
    )
    gen_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: from configuration)",
    )
    gen_parser.add_argument(
        "--half-dims",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        help="Detector half-dimensions [mm]",
    )
    gen_parser.add_argument(
        "--max-trials",
        type=int,
        default=None,
        help="Rejection trial cap per event (default: from configuration)",
    )
    gen_parser.add_argument(
        "--plot",
        default=None,
        help="Save event distribution plot to this file",
    )

    env_parser = subparsers.add_parser("envelope", help="Validate rejection envelopes")
    _add_common_arguments(env_parser)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    commands = {
        "info": cmd_info,
        "generate": cmd_generate,
        "envelope": cmd_envelope,
    }
    if args.command not in commands:
        parser.print_help()
        return 0

    try:
        commands[args.command](args)
    except (ConfigurationError, OSError, SamplingEnvelopeError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
