"""Entry point that routes an algorithm tag to its trainer.

>>> import asyncio
>>> from simulator import DataPoint, Parameters, run_simulation
>>> data = [DataPoint(0, 1), DataPoint(1, 3), DataPoint(2, 5)]
>>> params = Parameters(learning_rate=0.05, iterations=200)
>>> result = asyncio.run(run_simulation("linearRegression", data, params, random_state=0))
>>> round(result.slope)
2
"""

import asyncio
import logging
from typing import Mapping, Optional, Sequence, Union

from simulator.classification.clustering import simulate_kmeans
from simulator.classification.decision_tree import simulate_decision_tree
from simulator.classification.logistic_regression import simulate_logistic_regression
from simulator.exceptions import UnsupportedAlgorithmError
from simulator.progress import ProgressCallback
from simulator.regression.linear_regression import simulate_linear_regression
from simulator.types import Algorithm, DataPoint, Parameters, SimulationResult
from simulator.utils import RandomState

logger = logging.getLogger(__name__)

TRAINERS = {
    Algorithm.LINEAR_REGRESSION: simulate_linear_regression,
    Algorithm.LOGISTIC_REGRESSION: simulate_logistic_regression,
    Algorithm.K_MEANS_CLUSTERING: simulate_kmeans,
    Algorithm.DECISION_TREE: simulate_decision_tree,
}


def resolve_algorithm(algorithm: Union[Algorithm, str]) -> Algorithm:
    """Map a tag (enum member or its string value) onto :class:`Algorithm`."""
    try:
        return Algorithm(algorithm)
    except ValueError:
        raise UnsupportedAlgorithmError(algorithm) from None


async def run_simulation(
    algorithm: Union[Algorithm, str],
    data: Sequence[DataPoint],
    parameters: Union[Parameters, Mapping],
    on_progress: Optional[ProgressCallback] = None,
    *,
    random_state: RandomState = None,
) -> SimulationResult:
    """Run one algorithm to completion.

    ``on_progress`` receives strictly increasing iteration numbers and must not
    block; the trainer yields to the event loop after each call. There is no
    cancellation: a caller that loses interest simply drops the result.

    Raises
    ------
    UnsupportedAlgorithmError
        ``algorithm`` is not one of the known tags.
    DegenerateInputError
        ``data`` is empty.
    """
    algorithm = resolve_algorithm(algorithm)
    if not isinstance(parameters, Parameters):
        parameters = Parameters.from_dict(parameters)

    logger.info("Running %s on %d points", algorithm.value, len(data))
    result = await TRAINERS[algorithm](data, parameters, on_progress, random_state)
    logger.info("Finished %s after %d history entries", algorithm.value, len(result.history))
    return result


def simulate(
    algorithm: Union[Algorithm, str],
    data: Sequence[DataPoint],
    parameters: Union[Parameters, Mapping],
    on_progress: Optional[ProgressCallback] = None,
    *,
    random_state: RandomState = None,
) -> SimulationResult:
    """Blocking wrapper around :func:`run_simulation` for scripts and notebooks."""
    return asyncio.run(
        run_simulation(algorithm, data, parameters, on_progress, random_state=random_state)
    )
