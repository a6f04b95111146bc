#!/usr/bin/env python3
"""
Main simulation script for running SAS staircases against a simulated observer.

Each run starts a fresh staircase from the configured settings, drives it to
its stop criterion and reports the number of trials and reversals, the final
level and the mean level over the reversal trials.
"""

import argparse
import copy
import sys
import yaml
from pathlib import Path

import numpy as np

# Add the package to the path
sys.path.append(str(Path(__file__).parent.parent))

from sas_staircase.procedures import StochasticApproximationStaircase
from sas_staircase.simulation import ObserverResponseModel, simulate_staircase

DEFAULT_CONFIG = {
    'simulation': {'n_runs': 20, 'seed': 42, 'true_threshold': 50.0},
    'staircase': {'target_probability': 0.85, 'scale_constant': 30, 'start_value': 100,
                  'stop_mode': 'reversals', 'stop_threshold': 12, 'round_steps': False},
    'observer': {'slope': -0.2, 'threshold_probability': 0.85}
}


def load_config(config_path):
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f)


def run_simulation(config):
    """Run the configured number of staircases and collect a summary per run."""
    sim = config['simulation']
    staircase_params = dict(config['staircase'])
    phi = staircase_params.pop('target_probability')
    c = staircase_params.pop('scale_constant')
    x_1 = staircase_params.pop('start_value')
    model = ObserverResponseModel(**config.get('observer', {}))
    rng = np.random.default_rng(sim.get('seed'))

    print(f"Running {sim['n_runs']} staircases (phi={phi}, c={c}, x_1={x_1})")

    results = []
    for run in range(sim['n_runs']):
        staircase = StochasticApproximationStaircase(phi, c, x_1, **staircase_params)
        simulate_staircase(staircase, sim['true_threshold'], model, random_state=rng)
        reversal_values = staircase.reversal_values
        results.append({
            'run': run + 1,
            'trials': staircase.trial_count,
            'reversals': staircase.reversal_count,
            'stopped': staircase.stopped,
            'final_level': float(staircase.issued_values[-1]),
            'reversal_mean': float(reversal_values.mean()) if len(reversal_values) else float('nan'),
        })

    return results


def main():
    parser = argparse.ArgumentParser(description='Run SAS staircase simulations')
    parser.add_argument('--config', type=str,
                        default='configs/default.yaml',
                        help='Path to configuration file')
    parser.add_argument('--n-runs', type=int,
                        help='Number of staircases to simulate')
    parser.add_argument('--seed', type=int,
                        help='Random seed')

    args = parser.parse_args()

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Configuration file {args.config} not found. Using defaults.")
        config = copy.deepcopy(DEFAULT_CONFIG)

    # Override with command line arguments
    if args.n_runs:
        config['simulation']['n_runs'] = args.n_runs
    if args.seed is not None:
        config['simulation']['seed'] = args.seed

    results = run_simulation(config)

    print("Run | Trials | Reversals | Final level | Reversal mean")
    print("-" * 56)
    for r in results:
        print(f"{r['run']:3d} | {r['trials']:6d} | {r['reversals']:9d} | "
              f"{r['final_level']:11.2f} | {r['reversal_mean']:13.2f}")
    print("Simulation completed successfully!")


if __name__ == "__main__":
    main()
