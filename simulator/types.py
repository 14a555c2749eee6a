"""Data model shared by the trainers: input points, hyperparameters, results.

Every result and history snapshot is a frozen dataclass holding floats and
tuples, so a renderer can replay any iteration without worrying about the
trainer mutating its working arrays afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union


class Algorithm(str, Enum):
    """Algorithm tags understood by :func:`simulator.engine.run_simulation`."""

    LINEAR_REGRESSION = "linearRegression"
    LOGISTIC_REGRESSION = "logisticRegression"
    K_MEANS_CLUSTERING = "kMeansClustering"
    DECISION_TREE = "decisionTree"


@dataclass(frozen=True)
class DataPoint:
    """A single 2-D sample.

    ``label`` is read by the classifiers (missing means 0). ``cluster`` is a
    display annotation only; no trainer reads it.
    """

    x: float
    y: float
    label: Optional[int] = None
    cluster: Optional[int] = None


# Host UIs send camelCase keys.
_CAMEL_CASE_KEYS = {
    "learningRate": "learning_rate",
    "noiseLevel": "noise_level",
}


@dataclass(frozen=True)
class Parameters:
    """Hyperparameters for a single run.

    Parameters
    ----------
    learning_rate : float, default=0.01
        Gradient-descent step size.
    iterations : int, default=100
        Iteration budget. Also drives the maximum depth and split-search
        budget of the decision tree.
    regularization : float, default=0.0
        L2 strength for the regressions, minimum child share for tree splits.
    noise_level : float, default=0.2
        Only used by the dataset synthesizer.
    clusters : int, optional
        Number of k-means clusters (3 when omitted).

    Values are not validated; out-of-domain input is the caller's problem.
    """

    learning_rate: float = 0.01
    iterations: int = 100
    regularization: float = 0.0
    noise_level: float = 0.2
    clusters: Optional[int] = None

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "Parameters":
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


# ----------------------------------------------------------------------
# History snapshots
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class LinearRegressionSnapshot:
    iteration: int
    slope: float
    intercept: float
    loss: float


@dataclass(frozen=True)
class LogisticRegressionSnapshot:
    iteration: int
    weights: Tuple[float, float]
    bias: float
    loss: float


@dataclass(frozen=True)
class KMeansSnapshot:
    iteration: int
    centroids: Tuple[Tuple[float, float], ...]
    inertia: float


@dataclass(frozen=True)
class TreeGrowthSnapshot:
    """One finalized tree node, recorded in pre-order."""

    iteration: int
    budget_used: int
    node_index: int
    depth: int
    is_leaf: bool
    feature: Optional[str] = None
    threshold: Optional[float] = None
    prediction: Optional[int] = None


# ----------------------------------------------------------------------
# Results
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class LinearRegressionResult:
    slope: float
    intercept: float
    mse: float
    r2: float
    predictions: Tuple[float, ...]
    history: Tuple[LinearRegressionSnapshot, ...]


@dataclass(frozen=True)
class LogisticRegressionResult:
    weights: Tuple[float, float]
    bias: float
    accuracy: float
    precision: float
    recall: float
    f1: float
    predictions: Tuple[int, ...]
    probabilities: Tuple[float, ...]
    history: Tuple[LogisticRegressionSnapshot, ...]


@dataclass(frozen=True)
class KMeansResult:
    centroids: Tuple[Tuple[float, float], ...]
    assignments: Tuple[int, ...]
    inertia: float
    silhouette: float
    iterations: int
    clusters: int
    history: Tuple[KMeansSnapshot, ...]

    @property
    def predictions(self) -> Tuple[int, ...]:
        """Cluster assignments, exposed under the common result name."""
        return self.assignments


@dataclass(frozen=True)
class TreeNode:
    """Arena entry of the decision tree; children are arena indices."""

    depth: int
    is_leaf: bool
    prediction: Optional[int] = None
    feature: Optional[str] = None
    threshold: Optional[float] = None
    left: Optional[int] = None
    right: Optional[int] = None


@dataclass(frozen=True)
class Boundary:
    """Axis-aligned split segment.

    ``orientation`` is ``"vertical"`` for an x split (segment at ``x=position``
    spanning ``lower..upper`` in y) and ``"horizontal"`` for a y split.
    """

    orientation: str
    position: float
    lower: float
    upper: float
    depth: int


@dataclass(frozen=True)
class DecisionTreeResult:
    accuracy: float
    depth: int
    nodes: int
    gini: float
    boundaries: Tuple[Boundary, ...]
    predictions: Tuple[int, ...]
    tree: Tuple[TreeNode, ...] = field(default=(), repr=False)
    history: Tuple[TreeGrowthSnapshot, ...] = field(default=(), repr=False)


SimulationResult = Union[
    LinearRegressionResult,
    LogisticRegressionResult,
    KMeansResult,
    DecisionTreeResult,
]

