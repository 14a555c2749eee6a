"""
Command-line runner for the simulation engine.
"""
import argparse
import logging

import matplotlib.pyplot as plt

from simulator.datasets import generate_random_data, load_points
from simulator.engine import simulate
from simulator.evaluation import EvaluationToolkit
from simulator.types import Algorithm, Parameters

# Benchmark configuration
RANDOM_STATE = 42
LEARNING_RATE = 0.01
N_ITERATIONS = 100
N_POINTS = 50

METRICS = {
    Algorithm.LINEAR_REGRESSION: ("slope", "intercept", "mse", "r2"),
    Algorithm.LOGISTIC_REGRESSION: ("accuracy", "precision", "recall", "f1", "bias"),
    Algorithm.K_MEANS_CLUSTERING: ("inertia", "silhouette", "iterations", "clusters"),
    Algorithm.DECISION_TREE: ("accuracy", "depth", "nodes", "gini"),
}


def print_progress(iteration):
    print(f"\rIteration {iteration}", end="", flush=True)


def print_results(algorithm, result):
    """Print the metrics of a finished run as a two-column table."""
    print(f"\n\n{algorithm.value} Results:")
    print(f"{'='*40}")
    for name in METRICS[algorithm]:
        value = getattr(result, name)
        if isinstance(value, float):
            print(f"{name:<20} {value:.4f}")
        else:
            print(f"{name:<20} {value}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Run an interactive ML simulation')
    parser.add_argument('--algorithm', type=str, required=True,
                        choices=[a.value for a in Algorithm], help='Algorithm to run')
    parser.add_argument('--data', type=str, default=None, help='CSV file with x, y[, label] columns')
    parser.add_argument('--count', type=int, default=N_POINTS, help='Number of synthetic points')
    parser.add_argument('--learning-rate', type=float, default=LEARNING_RATE)
    parser.add_argument('--iterations', type=int, default=N_ITERATIONS)
    parser.add_argument('--regularization', type=float, default=0.0)
    parser.add_argument('--noise-level', type=float, default=0.2)
    parser.add_argument('--clusters', type=int, default=None)
    parser.add_argument('--seed', type=int, default=RANDOM_STATE)
    parser.add_argument('--plot', type=str, default=None, help='Save the training curve to this path')
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    algorithm = Algorithm(args.algorithm)
    parameters = Parameters(
        learning_rate=args.learning_rate,
        iterations=args.iterations,
        regularization=args.regularization,
        noise_level=args.noise_level,
        clusters=args.clusters,
    )

    if args.data:
        print(f"Loading data from {args.data}...")
        data = load_points(args.data)
    else:
        data = generate_random_data(algorithm, args.count, args.noise_level, random_state=args.seed)
    print(f"Dataset: {len(data)} points")

    result = simulate(algorithm, data, parameters, print_progress, random_state=args.seed)
    print_results(algorithm, result)

    if args.plot:
        EvaluationToolkit().plot_history(result, save_path=args.plot)
        plt.close('all')
        print(f"Plot saved to {args.plot}")

    return result


if __name__ == "__main__":
    main()
