"""Synthetic 2-D datasets shaped for each algorithm, plus CSV/DataFrame helpers.

All generators take a ``random_state`` (seed or ``numpy.random.Generator``)
so that runs are reproducible.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from simulator.types import Algorithm, DataPoint
from simulator.utils import RandomState, make_rng

logger = logging.getLogger(__name__)

CLASS_CENTERS = ((-2.0, -2.0), (2.0, 2.0))


def make_linear(count=50, slope=None, intercept=None, noise_level=0.2, random_state: RandomState = None):
    """Points around ``y = slope * x + intercept`` with x in [-5, 5).

    Slope and intercept are drawn from [-1, 1) and [-2, 2) when omitted. The
    noise is uniform in ``±3 * noise_level``.
    """
    rng = make_rng(random_state)
    if slope is None:
        slope = rng.uniform(-1, 1)
    if intercept is None:
        intercept = rng.uniform(-2, 2)

    x = rng.uniform(-5, 5, size=count)
    noise = rng.uniform(-1, 1, size=count) * noise_level * 3
    y = slope * x + intercept + noise
    return [DataPoint(float(xi), float(yi)) for xi, yi in zip(x, y)]


def make_blobs(count=50, centers=CLASS_CENTERS, noise_level=0.2, random_state: RandomState = None):
    """Binary classification data: labels alternate between the two centers.

    Each coordinate is jittered uniformly by ``±4 * noise_level``.
    """
    rng = make_rng(random_state)
    points = []
    for i in range(count):
        label = i % 2
        cx, cy = centers[label]
        dx, dy = rng.uniform(-1, 1, size=2) * noise_level * 4
        points.append(DataPoint(float(cx + dx), float(cy + dy), label=label))
    return points


def make_clusters(count=50, n_clusters=3, centers=None, noise_level=0.2, random_state: RandomState = None):
    """Points assigned round-robin to ``n_clusters`` centers.

    Centers are drawn from [-5, 5)^2 unless given. ``cluster`` records the
    generating center for display.
    """
    rng = make_rng(random_state)
    if centers is None:
        centers = rng.uniform(-5, 5, size=(n_clusters, 2))
    centers = np.asarray(centers, dtype=float)

    points = []
    for i in range(count):
        cluster = i % len(centers)
        dx, dy = rng.uniform(-1, 1, size=2) * noise_level * 3
        points.append(DataPoint(
            float(centers[cluster, 0] + dx),
            float(centers[cluster, 1] + dy),
            cluster=cluster,
        ))
    return points


def quadrant_label(x: float, y: float) -> int:
    """0 for the first and third quadrants, 1 for the second and fourth.

    Points lying on an axis get label 0.
    """
    if x < 0 < y or y < 0 < x:
        return 1
    return 0


def make_quadrants(count=50, noise_level=0.2, random_state: RandomState = None):
    """Uniform points in [-5, 5)^2 labelled by quadrant.

    Each label is flipped with probability ``noise_level``.
    """
    rng = make_rng(random_state)
    points = []
    for _ in range(count):
        x, y = rng.uniform(-5, 5, size=2)
        label = quadrant_label(x, y)
        if rng.random() < noise_level:
            label = 1 - label
        points.append(DataPoint(float(x), float(y), label=label))
    return points


def generate_random_data(
    algorithm: Union[Algorithm, str],
    count: int = 50,
    noise_level: float = 0.2,
    random_state: RandomState = None,
) -> List[DataPoint]:
    """Generate a dataset whose shape suits ``algorithm``."""
    algorithm = Algorithm(algorithm)
    if algorithm is Algorithm.LINEAR_REGRESSION:
        return make_linear(count, noise_level=noise_level, random_state=random_state)
    if algorithm is Algorithm.LOGISTIC_REGRESSION:
        return make_blobs(count, noise_level=noise_level, random_state=random_state)
    if algorithm is Algorithm.K_MEANS_CLUSTERING:
        return make_clusters(count, noise_level=noise_level, random_state=random_state)
    return make_quadrants(count, noise_level=noise_level, random_state=random_state)


# ----------------------------------------------------------------------
# DataFrame helpers
# ----------------------------------------------------------------------
def points_to_frame(points: Sequence[DataPoint]) -> pd.DataFrame:
    """One row per point with columns x, y, label, cluster (nullable ints)."""
    frame = pd.DataFrame(
        {
            "x": [p.x for p in points],
            "y": [p.y for p in points],
            "label": pd.array([p.label for p in points], dtype="Int64"),
            "cluster": pd.array([p.cluster for p in points], dtype="Int64"),
        }
    )
    return frame


def points_from_frame(frame: pd.DataFrame) -> List[DataPoint]:
    """Inverse of :func:`points_to_frame`. ``label`` and ``cluster`` are optional columns."""
    missing = {"x", "y"} - set(frame.columns)
    if missing:
        raise ValueError(f"DataFrame is missing required columns: {sorted(missing)}")

    def _optional_int(row, column) -> Optional[int]:
        if column not in row or pd.isna(row[column]):
            return None
        return int(row[column])

    return [
        DataPoint(float(row["x"]), float(row["y"]), _optional_int(row, "label"), _optional_int(row, "cluster"))
        for _, row in frame.iterrows()
    ]


def load_points(file_path: Union[str, Path]) -> List[DataPoint]:
    """Load data points from a CSV file with x, y and optional label/cluster columns."""
    frame = pd.read_csv(file_path)
    logger.debug("Loaded %d rows from %s", len(frame), file_path)
    return points_from_frame(frame)
