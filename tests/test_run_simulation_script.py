from simulator.scripts.run_simulation import main
from simulator.types import KMeansResult


def test_runs_on_synthetic_data(capsys):
    result = main(["--algorithm", "kMeansClustering", "--iterations", "10", "--count", "30"])

    out = capsys.readouterr().out
    assert isinstance(result, KMeansResult)
    assert "kMeansClustering Results:" in out
    assert "silhouette" in out


def test_loads_csv_and_saves_plot(tmp_path, capsys):
    csv_path = tmp_path / "points.csv"
    csv_path.write_text("x,y\n0,1\n1,3\n2,5\n3,7\n")
    plot_path = tmp_path / "loss.png"

    result = main([
        "--algorithm", "linearRegression",
        "--data", str(csv_path),
        "--learning-rate", "0.05",
        "--iterations", "300",
        "--plot", str(plot_path),
    ])

    assert plot_path.exists()
    assert len(result.predictions) == 4
    assert "Plot saved" in capsys.readouterr().out
