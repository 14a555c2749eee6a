import logging

import numpy as np

from simulator.evaluation import EvaluationToolkit
from simulator.progress import PROGRESS_STRIDE, ProgressReporter
from simulator.types import Boundary, DecisionTreeResult, TreeGrowthSnapshot, TreeNode
from simulator.utils import as_int_tuple, points_to_arrays

logger = logging.getLogger(__name__)

FEATURES = ("x", "y")
MAX_TREE_DEPTH = 10
# Subsets of this size or smaller become leaves.
MIN_SPLIT_SAMPLES = 5


class DecisionTreeClassifierFromScratch:
  """Gini decision tree whose growth is paid for out of an iteration budget.

  Every adjacent pair examined during a split search costs one unit of
  ``budget``. Once the budget is spent, nodes that are still open become
  leaves. Nodes live in ``self.nodes`` and refer to their children by index.
  """

  def __init__(self, budget=100, max_depth=None, min_split_share=0.0, min_sample_split=MIN_SPLIT_SAMPLES):
    self.budget = budget
    if max_depth is None:
      max_depth = min(MAX_TREE_DEPTH, budget // 10)
    self.max_depth = max_depth
    # Each side of a split must keep at least floor(n * min_split_share) samples.
    self.min_split_share = min_split_share
    self.min_sample_split = min_sample_split
    self.nodes = []
    self.history = []
    self.budget_used = 0
    self._reporter = ProgressReporter()

  def _gini_index(self, y):
    if len(y) == 0:
      return 0
    _, counts = np.unique(y, return_counts=True)
    probabilities = counts / len(y)
    return 1 - np.sum(probabilities ** 2)

  def _leaf_value_calculation(self, y):
    # bincount argmax picks the lowest label on ties
    if len(y) == 0:
      return 0
    return int(np.argmax(np.bincount(y.astype(int))))

  async def _consume_budget(self):
    self.budget_used += 1
    if self.budget_used > self.budget:
      return
    if self.budget_used % PROGRESS_STRIDE == 0 or self.budget_used == self.budget:
      await self._reporter.report(self.budget_used)

  def _record(self, node_index, node):
    self.history.append(TreeGrowthSnapshot(
      iteration=len(self.history),
      budget_used=self.budget_used,
      node_index=node_index,
      depth=node.depth,
      is_leaf=node.is_leaf,
      feature=node.feature,
      threshold=node.threshold,
      prediction=node.prediction,
    ))

  def _add_leaf(self, y, depth):
    node = TreeNode(depth=depth, is_leaf=True, prediction=self._leaf_value_calculation(y))
    self.nodes.append(node)
    self._record(len(self.nodes) - 1, node)
    return len(self.nodes) - 1

  async def _find_best_split(self, indices):
    y = self.y[indices]
    n_samples = len(indices)
    parent_impurity = self._gini_index(y)
    min_size = int(np.floor(n_samples * self.min_split_share))

    best_gain = -np.inf
    best_question = None
    best_datasplit = None

    for feature_index, feature in enumerate(FEATURES):
      values = self.X[indices, feature_index]
      sorted_values = np.sort(values, kind="stable")

      for i in range(n_samples - 1):
        await self._consume_budget()

        current_value, next_value = sorted_values[i], sorted_values[i + 1]
        if current_value == next_value:
          continue
        threshold = (current_value + next_value) / 2

        left_mask = values <= threshold
        n_left = int(left_mask.sum())
        n_right = n_samples - n_left
        if n_left < min_size or n_right < min_size:
          continue

        weighted_impurity = (
          (n_left / n_samples) * self._gini_index(y[left_mask])
          + (n_right / n_samples) * self._gini_index(y[~left_mask])
        )
        gain = parent_impurity - weighted_impurity

        if gain > best_gain:
          best_gain = gain
          best_question = (feature, float(threshold))
          best_datasplit = (indices[left_mask], indices[~left_mask])

    return best_gain, best_question, best_datasplit

  async def _build_tree(self, indices, depth=0):
    y = self.y[indices]
    if (
      depth >= self.max_depth
      or len(np.unique(y)) <= 1
      or len(indices) <= self.min_sample_split
      or self.budget_used >= self.budget
    ):
      return self._add_leaf(y, depth)

    gain, question, datasplit = await self._find_best_split(indices)
    if question is None or gain <= 0 or len(datasplit[0]) == 0 or len(datasplit[1]) == 0:
      return self._add_leaf(y, depth)

    feature, threshold = question
    node_index = len(self.nodes)
    self.nodes.append(TreeNode(depth=depth, is_leaf=False, feature=feature, threshold=threshold))
    self._record(node_index, self.nodes[node_index])

    left = await self._build_tree(datasplit[0], depth + 1)
    right = await self._build_tree(datasplit[1], depth + 1)
    self.nodes[node_index] = TreeNode(
      depth=depth, is_leaf=False, feature=feature, threshold=threshold, left=left, right=right
    )
    return node_index

  async def fit(self, X, y, reporter=None):
    self.X = np.asarray(X, dtype=float)
    self.y = np.asarray(y, dtype=int)
    self._reporter = reporter or ProgressReporter()
    self.nodes = []
    self.history = []
    self.budget_used = 0

    await self._build_tree(np.arange(len(self.y)), depth=0)

    # Spend whatever is left so progress always reaches the budget
    while self.budget_used < self.budget:
      await self._consume_budget()
    return self

  def predict_sample(self, x):
    node = self.nodes[0]
    while not node.is_leaf:
      feature_value = x[FEATURES.index(node.feature)]
      node = self.nodes[node.left] if feature_value <= node.threshold else self.nodes[node.right]
    return node.prediction

  def predict(self, test_X):
    x = np.asarray(test_X, dtype=float)
    return np.array([self.predict_sample(sample) for sample in x], dtype=int)

  def get_depth(self):
    return max(node.depth for node in self.nodes if node.is_leaf)

  def average_leaf_gini(self, y, predictions):
    """Mean Gini over leaves, grouping points by the label a leaf predicts.

    Leaves that predict the same label share one group, so this is only an
    approximation of per-leaf purity.
    """
    leaves = [node for node in self.nodes if node.is_leaf]
    if not leaves:
      return 0.0
    total = sum(self._gini_index(y[predictions == leaf.prediction]) for leaf in leaves)
    return float(total / len(leaves))

  def extract_boundaries(self, x_min, x_max, y_min, y_max):
    """Split segments clipped by the bounding box and every ancestor split."""
    boundaries = []

    def _extract(node_index, x_lo, x_hi, y_lo, y_hi):
      node = self.nodes[node_index]
      if node.is_leaf:
        return
      if node.feature == "x":
        boundaries.append(Boundary("vertical", node.threshold, y_lo, y_hi, node.depth))
        _extract(node.left, x_lo, node.threshold, y_lo, y_hi)
        _extract(node.right, node.threshold, x_hi, y_lo, y_hi)
      else:
        boundaries.append(Boundary("horizontal", node.threshold, x_lo, x_hi, node.depth))
        _extract(node.left, x_lo, x_hi, y_lo, node.threshold)
        _extract(node.right, x_lo, x_hi, node.threshold, y_hi)

    _extract(0, x_min, x_max, y_min, y_max)
    return boundaries


async def simulate_decision_tree(data, parameters, on_progress=None, random_state=None):
  """Grow the tree on (x, y) -> label and summarise it.

  ``random_state`` is accepted for a uniform trainer signature; tree growth
  is deterministic.
  """
  X, labels = points_to_arrays(data)

  tree = DecisionTreeClassifierFromScratch(
    budget=parameters.iterations,
    min_split_share=parameters.regularization,
  )
  logger.debug("Decision tree: %d points, budget %d, max depth %d", len(data), tree.budget, tree.max_depth)
  await tree.fit(X, labels, ProgressReporter(on_progress))
  if tree.budget_used > tree.budget:
    logger.info("Split search overran the budget (%d of %d units)", tree.budget_used, tree.budget)

  predictions = tree.predict(X)
  accuracy = EvaluationToolkit().classification_report(labels, predictions).accuracy
  x_min, y_min = X.min(axis=0)
  x_max, y_max = X.max(axis=0)

  return DecisionTreeResult(
    accuracy=accuracy,
    depth=tree.get_depth(),
    nodes=len(tree.nodes),
    gini=tree.average_leaf_gini(labels, predictions),
    boundaries=tuple(tree.extract_boundaries(float(x_min), float(x_max), float(y_min), float(y_max))),
    predictions=as_int_tuple(predictions),
    tree=tuple(tree.nodes),
    history=tuple(tree.history),
  )
