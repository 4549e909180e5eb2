"""
treegp/errors.py - Exception hierarchy
"""


class TreeGPError(Exception):
    """Base for all treegp exceptions."""

    pass


class ConfigurationError(TreeGPError):
    """Invalid run parameters, detected before any generation runs."""

    pass


class EvaluationError(TreeGPError):
    """A program could not be evaluated or scored."""

    pass


class StructuralError(TreeGPError):
    """A point index does not address a node of the tree."""

    pass
