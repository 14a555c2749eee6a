import logging

import numpy as np

from simulator.evaluation import EvaluationToolkit
from simulator.progress import ProgressReporter
from simulator.types import LinearRegressionResult, LinearRegressionSnapshot
from simulator.utils import as_float_tuple, make_rng, points_to_arrays

logger = logging.getLogger(__name__)


class LinearRegressionGD:
    """
    Simple linear regression y = slope * x + intercept fitted by gradient descent.

    Parameters:
    -----------
    learning_rate : float, default=0.01
        Learning rate for gradient descent
    n_iterations : int, default=100
        Number of iterations for optimization
    regularization : float, default=0.0
        L2 penalty on the slope. The intercept is never regularized.
    random_state : int, Generator or None
        Seed for the initial slope and intercept
    """

    def __init__(self, learning_rate=0.01, n_iterations=100, regularization=0.0, random_state=None):
        self.learning_rate = learning_rate
        self.n_iterations = n_iterations
        self.regularization = regularization
        self.random_state = random_state
        self.slope = None
        self.intercept = None
        self.history = []

    async def fit(self, x, y, reporter=None):
        """
        Fit the line using gradient descent.

        Parameters:
        -----------
        x : array-like, shape (n_samples,)
            Feature values
        y : array-like, shape (n_samples,)
            Target values
        reporter : ProgressReporter, optional
            Receives the 1-based iteration every few iterations
        """
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        reporter = reporter or ProgressReporter()
        rng = make_rng(self.random_state)

        # Small random start so the history shows the line moving into place
        self.slope = float(rng.uniform(-1, 1))
        self.intercept = float(rng.uniform(-1, 1))
        self.history = []

        for i in range(self.n_iterations):
            if reporter.should_report(i + 1, self.n_iterations):
                await reporter.report(i + 1)

            errors = self.slope * x + self.intercept - y

            # Calculate gradients
            gradient_slope = np.mean(errors * x) + self.regularization * self.slope
            gradient_intercept = np.mean(errors)
            loss = np.mean(errors ** 2)

            # Update parameters
            self.slope -= self.learning_rate * float(gradient_slope)
            self.intercept -= self.learning_rate * float(gradient_intercept)

            self.history.append(LinearRegressionSnapshot(
                iteration=i,
                slope=self.slope,
                intercept=self.intercept,
                loss=float(loss),
            ))

        return self

    def predict(self, x):
        """
        Predict using the fitted line.

        Parameters:
        -----------
        x : array-like, shape (n_samples,)

        Returns:
        --------
        array, shape (n_samples,)
            Predicted values
        """
        return self.slope * np.asarray(x, dtype=float) + self.intercept


async def simulate_linear_regression(data, parameters, on_progress=None, random_state=None):
    """Run gradient-descent linear regression on the points and collect metrics."""
    X, _ = points_to_arrays(data)
    x, y = X[:, 0], X[:, 1]
    if np.all(y == y[0]):
        logger.warning("Target has zero variance; R-square is undefined")

    model = LinearRegressionGD(
        learning_rate=parameters.learning_rate,
        n_iterations=parameters.iterations,
        regularization=parameters.regularization,
        random_state=make_rng(random_state),
    )
    logger.debug("Linear regression: %d points, %d iterations", len(data), parameters.iterations)
    await model.fit(x, y, ProgressReporter(on_progress))

    predictions = model.predict(x)
    with np.errstate(divide="ignore", invalid="ignore"):
        metrics = EvaluationToolkit().regression_report(y, predictions)

    return LinearRegressionResult(
        slope=model.slope,
        intercept=model.intercept,
        mse=metrics.mse,
        r2=metrics.r_square,
        predictions=as_float_tuple(predictions),
        history=tuple(model.history),
    )
