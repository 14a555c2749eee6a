from simulator.regression.linear_regression import LinearRegressionGD, simulate_linear_regression

__all__ = ['LinearRegressionGD', 'simulate_linear_regression']
