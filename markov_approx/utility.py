import numpy as np

from .exceptions import InvalidArgument

"""
Scalar period utility functions used in economic models (log, CRRA and
constant Frisch elasticity).  Independent of the Markov chain routines.
"""

CONSUMPTION_FLOOR = 1e-10
UTILITY_FLOOR = -1e18
LOG_UNITY_TOL = 1e-8


class LogUtility:
    """Log utility, u(c) = log(c)

    For c <= 1e-10 the utility is set to -1e18 and the marginal utility to 1e10.
    """

    def evaluate(self, c):
        return np.log(c) if c > CONSUMPTION_FLOOR else UTILITY_FLOOR

    def derivative(self, c):
        return 1 / c if c > CONSUMPTION_FLOOR else 1 / CONSUMPTION_FLOOR

    def __call__(self, c):
        return self.evaluate(c)


class CRRAUtility:
    """Constant relative risk aversion utility, u(c) = (c^(1 - gamma) - 1) / (1 - gamma)

    Parameters
    ----------
    gamma : float
        Coefficient of relative risk aversion.  Must not be within 1e-8 of one, use LogUtility instead.

    Notes
    -----
    For c <= 1e-10 the utility is set to -1e18 and the marginal utility is evaluated at 1e-10.
    """

    def __init__(self, gamma):
        if abs(gamma - 1.0) < LOG_UNITY_TOL:
            raise InvalidArgument(
                f"Your value for gamma ({gamma}) is very close to 1... Consider using LogUtility"
            )
        self.gamma = gamma

    def evaluate(self, c):
        if c > CONSUMPTION_FLOOR:
            return (c ** (1.0 - self.gamma) - 1.0) / (1.0 - self.gamma)
        return UTILITY_FLOOR

    def derivative(self, c):
        return max(c, CONSUMPTION_FLOOR) ** (-self.gamma)

    def __call__(self, c):
        return self.evaluate(c)


class CFEUtility:
    """Constant Frisch elasticity disutility of labour, v(h) = -h^(1 + 1/psi) / (1 + 1/psi)

    Parameters
    ----------
    psi : float
        Frisch elasticity of labour supply, positive
    """

    def __init__(self, psi):
        if not psi > 0:
            raise InvalidArgument(f"The Frisch elasticity, psi, must be positive, got {psi}")
        self.psi = psi

    def _check_hours(self, h):
        if h < 0:
            raise InvalidArgument(f"Hours worked must be non-negative, got {h}")

    def evaluate(self, h):
        self._check_hours(h)
        exponent = 1 + 1 / self.psi
        return -(h ** exponent) / exponent

    def derivative(self, h):
        self._check_hours(h)
        return -(h ** (1 / self.psi))

    def __call__(self, h):
        return self.evaluate(h)


def derivative(u, x):
    """Marginal utility of the utility function `u` at `x`"""
    return u.derivative(x)
