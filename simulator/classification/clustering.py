"""K-Means clustering implemented from scratch.

``KMeansScratch`` follows Lloyd's algorithm on 2-D points, records every
iteration's centroids for replay and stops early once no centroid moves more
than ``CONVERGENCE_TOLERANCE`` along either axis. A simplified silhouette
score summarises the final partition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from simulator.progress import ProgressReporter
from simulator.types import KMeansResult, KMeansSnapshot
from simulator.utils import as_int_tuple, make_rng, points_to_arrays

logger = logging.getLogger(__name__)

ArrayLike = np.ndarray

DEFAULT_CLUSTERS = 3
CONVERGENCE_TOLERANCE = 1e-3


def _centroid_tuple(centroids: ArrayLike) -> tuple:
    return tuple((float(cx), float(cy)) for cx, cy in centroids)


@dataclass
class KMeansScratch:
    """K-Means clustering using Lloyd's algorithm.

    Parameters
    ----------
    n_clusters : int, default=3
        Number of clusters to form.
    max_iter : int, default=100
        Maximum number of assignment/update rounds.
    tol : float, default=1e-3
        Largest per-axis centroid move still counted as converged.
    random_state : int or Generator, optional
        Seed controlling centroid initialisation for reproducibility.

    After ``fit``, ``inertia_`` is the inertia of the last recorded
    iteration, including the one that converged, rather than the value from
    the iteration before it. A run that converges on its first iteration
    therefore reports a finite inertia, never ``inf``.
    """

    n_clusters: int = DEFAULT_CLUSTERS
    max_iter: int = 100
    tol: float = CONVERGENCE_TOLERANCE
    random_state: Optional[object] = None

    cluster_centers_: Optional[ArrayLike] = field(init=False, default=None, repr=False)
    labels_: Optional[ArrayLike] = field(init=False, default=None, repr=False)
    inertia_: float = field(init=False, default=float("inf"), repr=False)
    n_iter_: int = field(init=False, default=0)
    history_: List[KMeansSnapshot] = field(init=False, default_factory=list, repr=False)

    # ------------------------------------------------------------------
    async def fit(self, X: ArrayLike, reporter: Optional[ProgressReporter] = None) -> "KMeansScratch":
        """Fit K-Means, reporting progress on every iteration.

        Centroids start at ``n_clusters`` data points drawn with replacement,
        so two centroids may coincide; the later one then simply never wins a
        point and keeps its position.
        """
        X = np.asarray(X, dtype=float)
        n_samples = X.shape[0]
        reporter = reporter or ProgressReporter()
        rng = make_rng(self.random_state)

        centroids = X[rng.integers(0, n_samples, size=self.n_clusters)].copy()
        labels = np.zeros(n_samples, dtype=int)
        self.history_ = []
        self.n_iter_ = 0

        for iteration in range(self.max_iter):
            await reporter.report(iteration + 1)

            distances = self._compute_distances(X, centroids)
            # argmin keeps the lowest centroid index on ties
            labels = np.argmin(distances, axis=1)

            new_centroids = centroids.copy()
            for cluster_idx in range(self.n_clusters):
                members = X[labels == cluster_idx]
                if members.size:
                    new_centroids[cluster_idx] = members.mean(axis=0)

            # Inertia is measured against the centroids the points were assigned to
            inertia = float(np.sum(distances[np.arange(n_samples), labels] ** 2))
            self.history_.append(KMeansSnapshot(
                iteration=iteration,
                centroids=_centroid_tuple(centroids),
                inertia=inertia,
            ))
            self.inertia_ = inertia
            self.n_iter_ = iteration + 1

            if not np.any(np.abs(centroids - new_centroids) > self.tol):
                logger.info("K-Means converged after %d iterations", self.n_iter_)
                break

            centroids = new_centroids

        self.cluster_centers_ = centroids
        self.labels_ = labels
        return self

    # ------------------------------------------------------------------
    @staticmethod
    def _compute_distances(X: ArrayLike, centroids: ArrayLike) -> ArrayLike:
        """Euclidean distances, shape (n_samples, n_clusters)."""
        return np.linalg.norm(X[:, None, :] - centroids[None, :, :], axis=2)


def simplified_silhouette(X: ArrayLike, labels: ArrayLike, n_clusters: int) -> float:
    """Average per-point silhouette.

    ``a`` is the mean distance to the other members of the point's cluster
    and ``b`` the smallest mean distance to any other cluster. A point alone
    in its cluster, or with no populated cluster to compare against,
    contributes 0.
    """
    X = np.asarray(X, dtype=float)
    pairwise = np.linalg.norm(X[:, None, :] - X[None, :, :], axis=2)
    members = [labels == cluster for cluster in range(n_clusters)]

    total = 0.0
    for i in range(len(X)):
        own = labels[i]
        neighbours = members[own].copy()
        neighbours[i] = False
        count = int(neighbours.sum())
        if count == 0:
            continue
        a = pairwise[i, neighbours].mean()

        b = np.inf
        for cluster in range(n_clusters):
            if cluster != own and members[cluster].any():
                b = min(b, pairwise[i, members[cluster]].mean())

        scale = max(a, b)
        if np.isfinite(b) and scale > 0:
            total += (b - a) / scale
    return float(total / len(X))


async def simulate_kmeans(data, parameters, on_progress=None, random_state=None):
    """Cluster the points and return centroids, assignments and the history."""
    X, _ = points_to_arrays(data)
    k = parameters.clusters or DEFAULT_CLUSTERS

    model = KMeansScratch(
        n_clusters=k,
        max_iter=parameters.iterations,
        random_state=make_rng(random_state),
    )
    logger.debug("K-Means: %d points, k=%d, up to %d iterations", len(data), k, parameters.iterations)
    await model.fit(X, ProgressReporter(on_progress))

    return KMeansResult(
        centroids=_centroid_tuple(model.cluster_centers_),
        assignments=as_int_tuple(model.labels_),
        inertia=model.inertia_,
        silhouette=simplified_silhouette(X, model.labels_, k),
        iterations=model.n_iter_,
        clusters=k,
        history=tuple(model.history_),
    )
