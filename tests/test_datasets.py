import numpy as np
import pytest

from simulator.datasets import (
    generate_random_data,
    load_points,
    make_blobs,
    make_clusters,
    make_linear,
    make_quadrants,
    points_from_frame,
    points_to_frame,
    quadrant_label,
)
from simulator.types import Algorithm, DataPoint


def test_seeded_generation_is_reproducible():
    first = generate_random_data(Algorithm.DECISION_TREE, count=20, random_state=42)
    second = generate_random_data("decisionTree", count=20, random_state=42)

    assert first == second


def test_noise_free_line():
    points = make_linear(25, slope=0.5, intercept=1.0, noise_level=0.0, random_state=0)

    assert len(points) == 25
    for p in points:
        assert p.y == pytest.approx(0.5 * p.x + 1.0)
        assert -5 <= p.x < 5


def test_blobs_alternate_labels_around_centers():
    points = make_blobs(6, noise_level=0.0, random_state=0)

    assert [p.label for p in points] == [0, 1, 0, 1, 0, 1]
    assert (points[0].x, points[0].y) == (-2.0, -2.0)
    assert (points[1].x, points[1].y) == (2.0, 2.0)


def test_clusters_are_annotated_round_robin():
    points = make_clusters(9, n_clusters=3, noise_level=0.0, random_state=0)

    assert [p.cluster for p in points] == [0, 1, 2] * 3
    assert all(p.label is None for p in points)


def test_quadrant_labels_without_noise():
    points = make_quadrants(50, noise_level=0.0, random_state=1)

    assert all(p.label == quadrant_label(p.x, p.y) for p in points)
    assert quadrant_label(1, 1) == 0
    assert quadrant_label(-1, 1) == 1
    assert quadrant_label(-1, -1) == 0
    assert quadrant_label(1, -1) == 1


def test_points_on_an_axis_get_label_zero():
    assert quadrant_label(0.0, 2.0) == 0
    assert quadrant_label(0.0, -2.0) == 0
    assert quadrant_label(-3.0, 0.0) == 0
    assert quadrant_label(3.0, 0.0) == 0
    assert quadrant_label(0.0, 0.0) == 0


def test_quadrant_noise_flips_every_label_at_one():
    points = make_quadrants(20, noise_level=1.0, random_state=2)

    assert all(p.label != quadrant_label(p.x, p.y) for p in points)


def test_frame_conversion_keeps_optional_fields():
    points = [DataPoint(0.5, 1.5, label=1), DataPoint(-1.0, 2.0, cluster=2)]
    frame = points_to_frame(points)

    assert list(frame.columns) == ["x", "y", "label", "cluster"]
    assert points_from_frame(frame) == points


def test_frame_without_coordinates_is_rejected():
    import pandas as pd

    with pytest.raises(ValueError, match="missing required columns"):
        points_from_frame(pd.DataFrame({"x": [1.0]}))


def test_load_points_from_csv(tmp_path):
    path = tmp_path / "points.csv"
    path.write_text("x,y,label\n0.0,1.0,0\n2.0,3.5,1\n")

    points = load_points(path)

    assert points == [DataPoint(0.0, 1.0, label=0), DataPoint(2.0, 3.5, label=1)]
    assert np.isclose(points[1].y, 3.5)
