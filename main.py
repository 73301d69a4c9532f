"""
Command line entry point for field generation.

Usage:
    python main.py generate --level hard --seed 42          # Print scenario + scoring
    python main.py generate --level easy --mjcf field.xml   # Also export MJCF
    python main.py generate --rrd field.rrd                 # Rerun recording
    python main.py bench [--count N] [--level L]            # Generation benchmark
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import numpy as np

from field_gen import (
    FieldScene,
    Level,
    ScenarioGenerator,
    describe_scenario,
    scenario_id,
    visualize_scenario,
)
from field_gen.config import FieldConfig
from field_gen.scenario import format_scoring

log = logging.getLogger(__name__)


def _setup_logging() -> None:
    """Configure root logger level and install an excepthook.

    Unhandled exceptions are logged before the default hook prints them.
    """
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Capture unhandled exceptions to the log
    _original_excepthook = sys.excepthook

    def _logging_excepthook(exc_type, exc_value, exc_tb):
        if not issubclass(exc_type, KeyboardInterrupt):
            logging.critical(
                "Unhandled exception", exc_info=(exc_type, exc_value, exc_tb)
            )
        _original_excepthook(exc_type, exc_value, exc_tb)

    sys.excepthook = _logging_excepthook


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="main.py",
        description="Mix & Match field scenario generator",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    levels = [lv.value for lv in Level]

    # generate
    p_gen = sub.add_parser("generate", help="Generate one scenario and print it")
    p_gen.add_argument("--level", choices=levels, default="medium", help="Difficulty tier (default: medium)")
    p_gen.add_argument("--seed", type=int, default=None, help="Generator seed (default: random)")
    p_gen.add_argument("--mjcf", type=str, default=None, help="Write the visualized field to this MJCF file")
    p_gen.add_argument("--rrd", type=str, default=None, help="Save the visualized field as a Rerun recording")
    p_gen.add_argument("--no-beams", action="store_true", help="Generate from a box without beams")
    p_gen.add_argument("--quiet", action="store_true", help="Only log warnings")

    # bench
    p_bench = sub.add_parser("bench", help="Benchmark scenario generation")
    p_bench.add_argument("--count", type=int, default=1000, help="Number of scenarios")
    p_bench.add_argument("--level", choices=levels, default="hard", help="Difficulty tier (default: hard)")

    return parser


def _run_generate(args) -> None:
    seed = args.seed
    if seed is None:
        seed = int(np.random.default_rng().integers(0, 2**31))
    config = FieldConfig.no_beams() if args.no_beams else FieldConfig()
    log.info("Generating %s scenario, seed=%d, config=%s", args.level, seed, config.to_flat_dict())

    gen = ScenarioGenerator(args.level, seed=seed, config=config)
    scenario = gen.generate()

    print(describe_scenario(scenario, seed=seed))
    print("\nScoring:")
    print(format_scoring(scenario.calculate_scoring()))

    if args.rrd:
        import rerun as rr

        from field_gen.rerun_scene import RerunScene, log_scoring

        rr.init("field-gen", recording_id=scenario_id(seed))
        rr.save(args.rrd)
        scene = RerunScene()
        asyncio.run(visualize_scenario(scenario, scene))
        log_scoring(scenario.calculate_scoring())
        print(f"\nLogged {len(scene.pieces)} pieces to {args.rrd}")

    if args.mjcf:
        from field_gen.render import write_mjcf

        scene = FieldScene()
        asyncio.run(visualize_scenario(scenario, scene))
        path = write_mjcf(scene, args.mjcf)
        print(f"\nWrote {len(scene.pieces)} pieces to {path}")


def main():
    _setup_logging()

    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "generate":
        if args.quiet:
            logging.getLogger().setLevel(logging.WARNING)
        _run_generate(args)

    elif args.command == "bench":
        from field_gen.bench_gen import bench, print_stats

        # Per-structure INFO lines would swamp the timings
        logging.getLogger("field_gen").setLevel(logging.WARNING)
        print(f"Benchmarking {args.count} {args.level} scenarios...")
        print_stats(bench(args.count, args.level))


if __name__ == "__main__":
    main()
