import numpy as np

"""
Errors and warnings raised by the discretization and stationary distribution routines
"""


class InvalidArgument(ValueError):
    """Raised when a parameter is outside its domain, e.g. abs(rho) >= 1 or a non-square matrix"""


class NumericalFailure(np.linalg.LinAlgError):
    """Raised when the linear system for the stationary distribution is singular or ill-conditioned.

    The input matrix may itself be a valid stochastic matrix; the failure reflects a structural
    property of the chain (e.g. it is reducible) rather than malformed input.
    """


class StochasticityWarning(RuntimeWarning):
    """Issued when a discretized transition matrix has rows that do not sum to one within tolerance"""
