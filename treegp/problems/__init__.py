"""
treegp/problems - Problems bundled with treegp
"""
from .regression import RegressionProblem, regression

__all__ = ['RegressionProblem', 'regression']
