"""Benchmark scenario generation speed.

Usage:
    python -m field_gen.bench_gen                  # 1000 scenarios, hard
    python -m field_gen.bench_gen --count 5000     # more scenarios
    python -m field_gen.bench_gen --level easy     # another tier
"""

from __future__ import annotations

import argparse
import time

import numpy as np

from field_gen.generator import ScenarioGenerator
from field_gen.sampling import Level
from field_gen.scenario import scoring_array


def bench(n_scenarios: int, level: Level | str = Level.HARD) -> dict:
    """Run the benchmark. Returns timing and content stats."""
    rng = np.random.default_rng(42)
    seeds = [int(rng.integers(0, 2**32)) for _ in range(n_scenarios)]

    gen_times: list[float] = []
    pin_counts: list[int] = []
    connected: list[int] = []
    empty_slots = 0

    for seed in seeds:
        t0 = time.perf_counter()
        gen = ScenarioGenerator(level, seed=seed)
        scenario = gen.generate()
        t1 = time.perf_counter()
        gen_times.append(t1 - t0)

        # remaining_pins drains orange, so on-field pins exclude it
        on_field = [s for s in scenario.structures if s.family != "remaining_pins"]
        pin_counts.append(sum(len(s.pins()) for s in on_field))
        connected.append(int(scoring_array(scenario.calculate_scoring())[:, 0].sum()))
        empty_slots += 10 - len(scenario.structures)

    gen_arr = np.array(gen_times) * 1000  # ms
    pin_arr = np.array(pin_counts)

    return {
        "n_scenarios": n_scenarios,
        "gen_mean_ms": float(np.mean(gen_arr)),
        "gen_median_ms": float(np.median(gen_arr)),
        "gen_p95_ms": float(np.percentile(gen_arr, 95)),
        "gen_p99_ms": float(np.percentile(gen_arr, 99)),
        "gen_total_s": float(np.sum(gen_arr) / 1000),
        "pins_mean": float(np.mean(pin_arr)),
        "pins_max": int(np.max(pin_arr)),
        "connected_mean": float(np.mean(connected)),
        "empty_slots": empty_slots,
        "scenarios_per_sec": n_scenarios / (np.sum(gen_arr) / 1000),
    }


def print_stats(stats: dict) -> None:
    print(f"\n  scenarios:       {stats['n_scenarios']}")
    print(f"  pins/scenario:   {stats['pins_mean']:.1f} avg, {stats['pins_max']} max")
    print(f"  connected pins:  {stats['connected_mean']:.1f} avg")
    print(f"  empty slots:     {stats['empty_slots']}")
    print(f"  gen mean:        {stats['gen_mean_ms']:.3f} ms")
    print(f"  gen median:      {stats['gen_median_ms']:.3f} ms")
    print(f"  gen p95:         {stats['gen_p95_ms']:.3f} ms")
    print(f"  gen p99:         {stats['gen_p99_ms']:.3f} ms")
    print(f"  gen total:       {stats['gen_total_s']:.2f} s")
    print(f"  scenarios/sec:   {stats['scenarios_per_sec']:.0f}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark scenario generation")
    parser.add_argument("--count", type=int, default=1000, help="Number of scenarios")
    parser.add_argument(
        "--level", choices=[lv.value for lv in Level], default="hard", help="Difficulty tier"
    )
    args = parser.parse_args()

    print(f"Benchmarking {args.count} {args.level} scenarios...")
    print_stats(bench(args.count, args.level))


if __name__ == "__main__":
    main()
