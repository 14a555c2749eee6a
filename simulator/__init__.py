"""
Interactive ML simulation engine.

Four from-scratch trainers (linear regression, logistic regression, k-means,
decision tree) that report progress while they run and return results with
a replayable per-iteration history.
"""

from simulator.datasets import generate_random_data
from simulator.engine import run_simulation, simulate
from simulator.exceptions import DegenerateInputError, SimulationError, UnsupportedAlgorithmError
from simulator.types import Algorithm, DataPoint, Parameters

__all__ = [
    'Algorithm',
    'DataPoint',
    'Parameters',
    'run_simulation',
    'simulate',
    'generate_random_data',
    'SimulationError',
    'UnsupportedAlgorithmError',
    'DegenerateInputError',
]

__version__ = '1.0.0'
