"""
Utility functions shared by the trainers.
"""
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from simulator.exceptions import DegenerateInputError
from simulator.types import DataPoint

RandomState = Union[None, int, np.random.Generator]


def make_rng(random_state: RandomState = None) -> np.random.Generator:
    """
    Build a NumPy generator from a seed, an existing generator or None.

    Parameters:
    -----------
    random_state : int, numpy.random.Generator or None
        Seed for reproducible runs. A generator is returned unchanged so that
        callers can share one stream across several calls.
    """
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def points_to_arrays(data: Sequence[DataPoint]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split data points into a feature matrix and a label vector.

    Parameters:
    -----------
    data : sequence of DataPoint
        Input points. Missing labels are read as 0.

    Returns:
    --------
    X : array, shape (n_samples, 2)
        Columns are x and y.
    labels : array of int, shape (n_samples,)
    """
    if len(data) == 0:
        raise DegenerateInputError("Cannot train on an empty dataset")
    X = np.array([(point.x, point.y) for point in data], dtype=float)
    labels = np.array([point.label or 0 for point in data], dtype=int)
    return X, labels


def as_float_tuple(values: Optional[np.ndarray]) -> Tuple[float, ...]:
    """Convert an array into an immutable tuple of Python floats."""
    if values is None:
        return ()
    return tuple(float(v) for v in values)


def as_int_tuple(values: np.ndarray) -> Tuple[int, ...]:
    """Convert an array into an immutable tuple of Python ints."""
    return tuple(int(v) for v in values)
