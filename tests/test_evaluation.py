import asyncio

import numpy as np
import pytest

from simulator.classification.clustering import simulate_kmeans
from simulator.datasets import make_clusters
from simulator.evaluation import EvaluationToolkit
from simulator.types import LinearRegressionSnapshot, Parameters


@pytest.fixture
def toolkit():
    return EvaluationToolkit()


def test_classification_report_counts(toolkit):
    metrics = toolkit.classification_report([1, 1, 0, 0], [1, 0, 0, 1])

    assert metrics.accuracy == 0.5
    assert metrics.precision == 0.5
    assert metrics.recall == 0.5
    assert metrics.f1_score == 0.5
    assert metrics.confusion_matrix.tolist() == [[1, 1], [1, 1]]


def test_zero_denominators_give_zero(toolkit):
    metrics = toolkit.classification_report([0, 0, 0], [0, 0, 0])

    assert metrics.accuracy == 1.0
    assert metrics.precision == 0.0
    assert metrics.recall == 0.0
    assert metrics.f1_score == 0.0


def test_regression_report_perfect_fit(toolkit):
    metrics = toolkit.regression_report([1.0, 2.0, 3.0], [1.0, 2.0, 3.0])

    assert metrics.mse == 0.0
    assert metrics.rmse == 0.0
    assert metrics.mae == 0.0
    assert metrics.r_square == 1.0


def test_regression_report_constant_target(toolkit):
    metrics = toolkit.regression_report([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])

    assert not np.isfinite(metrics.r_square)
    assert metrics.mse == pytest.approx(2.0 / 3.0)


def test_history_frame_is_indexed_by_iteration():
    history = [LinearRegressionSnapshot(i, 0.1 * i, 1.0, 1.0 / (i + 1)) for i in range(4)]
    frame = EvaluationToolkit.history_frame(history)

    assert frame.index.tolist() == [0, 1, 2, 3]
    assert list(frame.columns) == ["slope", "intercept", "loss"]


def test_plot_history_saves_figure(toolkit, tmp_path):
    data = make_clusters(30, random_state=0)
    result = asyncio.run(simulate_kmeans(data, Parameters(iterations=10), random_state=0))
    path = tmp_path / "inertia.png"

    axes = toolkit.plot_history(result, save_path=str(path))

    assert path.exists()
    assert axes[0].get_ylabel() == "Inertia"


def test_plot_performance_curves_requires_history():
    with pytest.raises(ValueError):
        EvaluationToolkit.plot_performance_curves({})
