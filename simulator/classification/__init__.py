from simulator.classification.clustering import KMeansScratch, simplified_silhouette, simulate_kmeans
from simulator.classification.decision_tree import DecisionTreeClassifierFromScratch, simulate_decision_tree
from simulator.classification.logistic_regression import LogisticRegressionBCE, simulate_logistic_regression

__all__ = [
    'KMeansScratch',
    'simplified_silhouette',
    'simulate_kmeans',
    'DecisionTreeClassifierFromScratch',
    'simulate_decision_tree',
    'LogisticRegressionBCE',
    'simulate_logistic_regression',
]
