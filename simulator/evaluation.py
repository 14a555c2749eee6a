"""Utility module that gathers the evaluation metrics and training-curve plots
used by the simulation trainers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from sklearn.metrics import (
	accuracy_score,
	confusion_matrix,
	f1_score,
	mean_absolute_error,
	mean_squared_error,
	precision_score,
	r2_score,
	recall_score,
)

# History columns worth plotting, in order of preference.
CURVE_COLUMNS = ("loss", "inertia", "budget_used")


@dataclass
class ClassificationMetrics:
	"""Container for the primary classification statistics."""

	confusion_matrix: np.ndarray
	accuracy: float
	precision: float
	recall: float
	f1_score: float


@dataclass
class RegressionMetrics:
	"""Container for the primary regression statistics."""

	mse: float
	r_square: float
	rmse: float
	mae: float


class EvaluationToolkit:
	"""Compute metrics and visualise training histories."""

	def __init__(self, positive_label: int = 1, labels: Sequence[int] = (0, 1)):
		self.positive_label = positive_label
		self.labels = list(labels)

	# ------------------------------------------------------------------
	# Classification metrics
	# ------------------------------------------------------------------
	def classification_report(
		self,
		y_true: Sequence[int],
		y_pred: Sequence[int],
	) -> ClassificationMetrics:
		"""Metrics from the binary confusion matrix.

		Precision, recall and F1 fall back to 0 when their denominator is 0.
		"""
		y_true = np.asarray(y_true, dtype=int)
		y_pred = np.asarray(y_pred, dtype=int)
		cm = confusion_matrix(y_true, y_pred, labels=self.labels)

		accuracy = accuracy_score(y_true, y_pred)
		precision = precision_score(
			y_true, y_pred, pos_label=self.positive_label, zero_division=0
		)
		recall = recall_score(
			y_true, y_pred, pos_label=self.positive_label, zero_division=0
		)
		f1 = f1_score(y_true, y_pred, pos_label=self.positive_label, zero_division=0)

		return ClassificationMetrics(
			confusion_matrix=cm,
			accuracy=float(accuracy),
			precision=float(precision),
			recall=float(recall),
			f1_score=float(f1),
		)

	# ------------------------------------------------------------------
	# Regression metrics
	# ------------------------------------------------------------------
	def regression_report(
		self, y_true: Sequence[float], y_pred: Sequence[float]
	) -> RegressionMetrics:
		"""MSE, RMSE, MAE and R-square.

		R-square is ``1 - SS_res / SS_tot``. A constant target leaves it
		undefined; the non-finite value is returned as-is.
		"""
		y_true = np.asarray(y_true, dtype=float)
		y_pred = np.asarray(y_pred, dtype=float)

		mse = mean_squared_error(y_true, y_pred)
		rmse = np.sqrt(mse)
		mae = mean_absolute_error(y_true, y_pred)
		if len(y_true) < 2:
			r_square = float("nan")
		else:
			r_square = r2_score(y_true, y_pred, force_finite=False)

		return RegressionMetrics(
			mse=float(mse), r_square=float(r_square), rmse=float(rmse), mae=float(mae)
		)

	# ------------------------------------------------------------------
	# History helpers
	# ------------------------------------------------------------------
	@staticmethod
	def history_frame(history: Sequence) -> pd.DataFrame:
		"""Flatten a result history into a DataFrame indexed by iteration."""
		frame = pd.DataFrame([asdict(snapshot) for snapshot in history])
		if frame.empty:
			return frame
		return frame.set_index("iteration")

	@staticmethod
	def plot_performance_curves(history: Dict[str, Sequence[float]]) -> List[plt.Axes]:
		"""Plot training history curves such as loss or inertia.

		Parameters
		----------
		history: dict
			Keys correspond to metric names (e.g., "loss", "inertia").
			Values must be sequences containing metric values per iteration.
		"""

		if not history:
			raise ValueError("history dictionary is empty")

		metrics = list(history.keys())
		iterations = range(len(next(iter(history.values()))))

		fig, axes = plt.subplots(len(metrics), 1, figsize=(7, 4 * len(metrics)))
		if not isinstance(axes, np.ndarray):
			axes = np.array([axes])

		axes = axes.flatten()

		for ax, metric in zip(axes, metrics):
			ax.plot(iterations, history[metric], marker="o", markersize=3, label=metric)
			ax.set_xlabel("Iteration")
			ax.set_ylabel(metric.replace("_", " ").title())
			ax.set_title(f"{metric.replace('_', ' ').title()} over Iterations")
			ax.grid(True, linestyle="--", alpha=0.4)
			ax.legend()

		fig.tight_layout()
		return list(axes)

	def plot_history(self, result, save_path: Optional[str] = None) -> List[plt.Axes]:
		"""Plot the loss (or inertia) curve stored in a simulation result."""
		frame = self.history_frame(result.history)
		columns = [column for column in CURVE_COLUMNS if column in frame.columns]
		if not columns:
			raise ValueError("result history has no plottable columns")

		axes = self.plot_performance_curves(
			{column: frame[column].tolist() for column in columns}
		)
		if save_path:
			axes[0].figure.savefig(save_path, dpi=150, bbox_inches="tight")
		return axes
