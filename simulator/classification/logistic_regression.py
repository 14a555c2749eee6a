import logging

import numpy as np

from simulator.evaluation import EvaluationToolkit
from simulator.progress import ProgressReporter
from simulator.types import LogisticRegressionResult, LogisticRegressionSnapshot
from simulator.utils import as_float_tuple, as_int_tuple, make_rng, points_to_arrays

logger = logging.getLogger(__name__)


class LogisticRegressionBCE:
    """
    Two-feature logistic regression using Binary Cross-Entropy loss.

    Parameters:
    -----------
    learning_rate : float, default=0.01
        Learning rate for gradient descent
    n_iterations : int, default=100
        Number of training iterations
    regularization : float, default=0.0
        L2 penalty on both weights (the bias is not regularized)
    random_state : int, Generator or None
        Seed for the initial weights and bias
    """

    def __init__(self, learning_rate=0.01, n_iterations=100, regularization=0.0, random_state=None):
        self.learning_rate = learning_rate
        self.n_iterations = n_iterations
        self.regularization = regularization
        self.random_state = random_state
        self.coefficients = None
        self.intercept = None
        self.history = []

    def _sigmoid(self, z):
        """Sigmoid activation function."""
        return 1 / (1 + np.exp(-np.clip(z, -500, 500)))

    def _initialize_parameters(self, rng):
        """Initialize weights and bias to small random values."""
        self.coefficients = rng.uniform(-0.1, 0.1, size=2)
        self.intercept = float(rng.uniform(-0.1, 0.1))

    def _compute_loss(self, probabilities, y):
        """Compute Binary Cross-Entropy loss."""
        epsilon = 1e-8  # Small constant to prevent log(0)
        return -np.mean(
            y * np.log(probabilities + epsilon) + (1 - y) * np.log(1 - probabilities + epsilon)
        )

    async def fit(self, X, y, reporter=None):
        """
        Fit logistic regression model using gradient descent.

        Parameters:
        -----------
        X : array-like, shape (n_samples, 2)
            Training data
        y : array-like, shape (n_samples,)
            Target values (0 or 1)
        reporter : ProgressReporter, optional
            Receives the 1-based iteration every few iterations
        """
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float)
        n_samples = len(y)
        reporter = reporter or ProgressReporter()

        self._initialize_parameters(make_rng(self.random_state))
        self.history = []

        for i in range(self.n_iterations):
            if reporter.should_report(i + 1, self.n_iterations):
                await reporter.report(i + 1)

            # Forward propagation
            probabilities = self._sigmoid(X @ self.coefficients + self.intercept)
            loss = self._compute_loss(probabilities, y)

            # Backward propagation (gradient calculation)
            errors = probabilities - y
            gradient_coefficients = (1 / n_samples) * X.T @ errors
            gradient_coefficients += self.regularization * self.coefficients
            gradient_intercept = (1 / n_samples) * np.sum(errors)

            # Update parameters
            self.coefficients = self.coefficients - self.learning_rate * gradient_coefficients
            self.intercept -= self.learning_rate * float(gradient_intercept)

            self.history.append(LogisticRegressionSnapshot(
                iteration=i,
                weights=(float(self.coefficients[0]), float(self.coefficients[1])),
                bias=self.intercept,
                loss=float(loss),
            ))

        return self

    def predict_proba(self, X):
        """
        Predict the probability of class 1.

        Returns:
        --------
        array, shape (n_samples,)
        """
        X = np.asarray(X, dtype=float)
        return self._sigmoid(X @ self.coefficients + self.intercept)

    def predict(self, X):
        """
        Predict class labels (p >= 0.5 means class 1).

        Returns:
        --------
        array, shape (n_samples,)
        """
        probabilities = self.predict_proba(X)
        return np.where(probabilities >= 0.5, 1, 0)


async def simulate_logistic_regression(data, parameters, on_progress=None, random_state=None):
    """Train the two-feature classifier and report confusion-matrix metrics."""
    X, labels = points_to_arrays(data)
    if len(np.unique(labels)) < 2:
        logger.warning("All points share label %d; the classifier has nothing to separate", labels[0])

    model = LogisticRegressionBCE(
        learning_rate=parameters.learning_rate,
        n_iterations=parameters.iterations,
        regularization=parameters.regularization,
        random_state=make_rng(random_state),
    )
    logger.debug("Logistic regression: %d points, %d iterations", len(data), parameters.iterations)
    await model.fit(X, labels, ProgressReporter(on_progress))

    probabilities = model.predict_proba(X)
    predictions = model.predict(X)
    metrics = EvaluationToolkit().classification_report(labels, predictions)

    return LogisticRegressionResult(
        weights=(float(model.coefficients[0]), float(model.coefficients[1])),
        bias=model.intercept,
        accuracy=metrics.accuracy,
        precision=metrics.precision,
        recall=metrics.recall,
        f1=metrics.f1_score,
        predictions=as_int_tuple(predictions),
        probabilities=as_float_tuple(probabilities),
        history=tuple(model.history),
    )
