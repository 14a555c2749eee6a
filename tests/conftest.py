import matplotlib
import pytest

matplotlib.use("Agg")


@pytest.fixture
def progress_log():
    """Collects every iteration number passed to on_progress."""
    return []
