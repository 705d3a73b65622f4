#!/usr/bin/env python3
"""
Run a synthetic cohort through weight management and print a summary.

Usage: python3 scripts/run_cohort.py [--config configs/default.yaml]
                                     [--scenario overrides.yaml]
                                     [--seed 42] [--n-years 10]
                                     [--output results/episodes.npz]
                                     [--plot-dir results/figures]
"""

import argparse
import logging
from pathlib import Path

import numpy as np

from weight_mgmt.config import load_config
from weight_mgmt.model import run_cohort_simulation
from weight_mgmt.snapshots import EpisodeRecorder
from weight_mgmt.utils import timer


DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "default.yaml"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--config', default=str(DEFAULT_CONFIG),
                        help='Base configuration YAML')
    parser.add_argument('--scenario', default=None,
                        help='Scenario override YAML')
    parser.add_argument('--seed', type=int, default=None,
                        help='Override simulation.seed')
    parser.add_argument('--n-years', type=int, default=None,
                        help='Override simulation.n_years')
    parser.add_argument('--output', default=None,
                        help='Save per-person series to this .npz path')
    parser.add_argument('--plot-dir', default=None,
                        help='Write summary figures (PNG) to this directory')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log individual episode starts and stops')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    overrides = {}
    if args.seed is not None:
        overrides.setdefault('simulation', {})['seed'] = args.seed
    if args.n_years is not None:
        overrides.setdefault('simulation', {})['n_years'] = args.n_years
    config = load_config(args.config, scenario_path=args.scenario,
                         sweep_overrides=overrides or None)

    record = (args.output is not None or args.plot_dir is not None
              or config.output.record_trajectories)
    recorder = EpisodeRecorder(
        enabled=record,
        interval_ticks=config.output.record_interval_ticks,
    )

    with timer("cohort"):
        result = run_cohort_simulation(config, recorder=recorder)

    print("=== Weight management cohort ===")
    print(f"  Individuals:          {result.n_individuals}")
    print(f"  Ticks:                {result.n_ticks} "
          f"({config.simulation.tick_days:g} days each)")
    print(f"  Episodes started:     {result.episodes_started}")
    print(f"    adherent:           {result.n_adherent_starts}")
    print(f"    long-term success:  {result.n_long_term_success}")
    print(f"  Episodes stopped:     {result.episodes_stopped}")
    print(f"  Active at end:        {result.final_active}")
    print(f"  Peak active:          {int(np.max(result.n_active))}")
    if np.any(np.isfinite(result.mean_adult_bmi)):
        print(f"  Mean adult BMI start: {result.mean_adult_bmi[0]:.2f}")
        print(f"  Mean adult BMI end:   {result.mean_adult_bmi[-1]:.2f}")

    if recorder.enabled:
        output = args.output or str(Path(config.output.directory) / "episodes.npz")
        recorder.save(output)
        print(f"  Series saved to {output}")

    if args.plot_dir is not None:
        from weight_mgmt.viz import (
            plot_active_episodes,
            plot_mean_adult_bmi,
            plot_person_series,
        )
        plot_dir = Path(args.plot_dir)
        plot_dir.mkdir(parents=True, exist_ok=True)
        plot_active_episodes(result, save_path=str(plot_dir / "active_episodes.png"))
        plot_mean_adult_bmi(result, save_path=str(plot_dir / "mean_adult_bmi.png"))
        plot_person_series(recorder, person_ids=sorted(recorder.series)[:8],
                           save_path=str(plot_dir / "person_series.png"))
        print(f"  Figures saved to {plot_dir}")


if __name__ == '__main__':
    main()
