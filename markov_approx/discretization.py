import collections
import numbers
import warnings

import numpy as np
import scipy.stats as stats

from .exceptions import InvalidArgument, StochasticityWarning
from .markov_chain_metrics import STOCHASTIC_TOL, is_stochastic, rows_not_summing_to_one, stationary_distr

"""
Discretization of the first-order autoregressive process

    y_t = rho * y_(t-1) + u_t,    u_t ~ N(0, sigma^2)

into a finite-state Markov chain, using either Tauchen's (1986) or Rouwenhorst's (1995) method
"""

DEFAULT_M = 3
DEFAULT_N = 9

MarkovApproximation = collections.namedtuple(
    "MarkovApproximation", ["transition_matrix", "stationary_distribution", "grid"]
)


def _check_ar1_parameters(rho, sigma, N):
    if not abs(rho) < 1:
        raise InvalidArgument(
            f"The persistence parameter, rho, must be less than one in absolute value, got {rho}"
        )
    if not sigma > 0:
        raise InvalidArgument(f"The shock standard deviation, sigma, must be positive, got {sigma}")
    if isinstance(N, bool) or not isinstance(N, numbers.Integral) or N < 2:
        raise InvalidArgument(f"The number of states, N, must be an integer of at least 2, got {N}")


def _symmetric_grid(ymax, N):
    grid = np.linspace(-ymax, ymax, N)
    # average with the mirrored grid so that grid == -grid[::-1] holds exactly
    return (grid - grid[::-1]) / 2


def _check_stochastic(transition_matrix, method, tol):
    if not is_stochastic(transition_matrix, tol=tol):
        rows = rows_not_summing_to_one(transition_matrix, tol=tol)
        max_deviation = np.max(np.absolute(transition_matrix.sum(axis=1) - 1))
        warnings.warn(
            f"Error in {method} transition matrix: rows {rows.tolist()} do not sum to one "
            f"(max deviation {max_deviation:.3g})",
            StochasticityWarning,
            stacklevel=3,
        )


def tauchen(rho, sigma, m=DEFAULT_M, N=DEFAULT_N, tol=STOCHASTIC_TOL):
    """Discretizes an AR(1) process with Tauchen's (1986) method

    Parameters
    ----------
    rho : float
        Autocorrelation coefficient, abs(rho) < 1
    sigma : float
        Standard deviation of the Gaussian white noise u_t
    m : float, optional
        Width of the discretized state space in unconditional standard deviations of y_t
        (ymax = m * std(y), ymin = -ymax).  Default is 3, as in Tauchen.
    N : int, optional
        Number of states approximating y_t.  Default is 9.
    tol : float, optional
        Tolerance of the row sum check run on the result.  Default is STOCHASTIC_TOL (5e-15).

    Returns
    -------
    transition_matrix : ndarray
        N x N array, where the (i,j)th element is the probability of moving from state i to state j
    grid : ndarray
        The N evenly spaced states, from -ymax to ymax

    Raises
    ------
    InvalidArgument
        If abs(rho) >= 1, sigma <= 0, m <= 0 or N < 2

    Notes
    -----
    Each interior column gets the probability mass of an interval of half-width w centred on its
    state, and the first and last columns absorb the tails.  If the rows of the resulting matrix do
    not sum to one within tolerance a StochasticityWarning is issued and the matrix is still returned.
    """

    _check_ar1_parameters(rho, sigma, N)
    if not m > 0:
        raise InvalidArgument(f"The span multiplier, m, must be positive, got {m}")

    std_y = sigma / np.sqrt(1 - rho ** 2)
    ymax = m * std_y
    grid = _symmetric_grid(ymax, N)
    w = (grid[-1] - grid[0]) / (N - 1) / 2

    shock = stats.norm(loc=0, scale=sigma)
    transition_matrix = np.zeros((N, N))
    # conditional mean of next period's state, one entry per current state (row)
    mean_next = rho * grid
    for j in range(1, N - 1):
        transition_matrix[:, j] = shock.cdf(grid[j] - mean_next + w) - shock.cdf(grid[j] - mean_next - w)
    transition_matrix[:, 0] = shock.cdf(grid[0] - mean_next + w)
    transition_matrix[:, -1] = 1 - shock.cdf(grid[-1] - mean_next - w)

    _check_stochastic(transition_matrix, "Tauchen", tol)
    return transition_matrix, grid


def rouwenhorst_step(transition_matrix, p, q):
    """Grows an n x n Rouwenhorst transition matrix to size n+1

    Parameters
    ----------
    transition_matrix : array_like
        n x n row stochastic array from the previous step
    p : float
        Weight of the top-left embedding
    q : float
        Weight of the bottom-right embedding

    Returns
    -------
    grown : ndarray
        (n+1) x (n+1) row stochastic array
    """

    transition_matrix = np.asarray(transition_matrix, dtype=float)
    n = transition_matrix.shape[0]
    grown = np.zeros((n + 1, n + 1))
    grown[:-1, :-1] += p * transition_matrix
    grown[:-1, 1:] += (1 - p) * transition_matrix
    grown[1:, :-1] += (1 - q) * transition_matrix
    grown[1:, 1:] += q * transition_matrix
    # interior rows got contributions from two embeddings and sum to two, the first and last
    # rows sum to one; dividing by the computed row sums halves the interior rows
    grown /= grown.sum(axis=1, keepdims=True)
    return grown


def rouwenhorst(rho, sigma, N, tol=STOCHASTIC_TOL):
    """Discretizes an AR(1) process with Rouwenhorst's (1995) method

    Parameters
    ----------
    rho : float
        Autocorrelation coefficient, abs(rho) < 1
    sigma : float
        Standard deviation of the Gaussian white noise u_t
    N : int
        Number of states approximating y_t
    tol : float, optional
        Tolerance of the row sum check run on the result.  Default is STOCHASTIC_TOL (5e-15).

    Returns
    -------
    transition_matrix : ndarray
        N x N array, where the (i,j)th element is the probability of moving from state i to state j
    grid : ndarray
        The N evenly spaced states, from -sqrt(N-1) * std(y) to sqrt(N-1) * std(y)

    Raises
    ------
    InvalidArgument
        If abs(rho) >= 1, sigma <= 0 or N < 2

    Notes
    -----
    Starting from the 2-state matrix [[p, 1-p], [1-q, q]] with p = q = (1+rho)/2, the matrix is grown
    one state at a time by rouwenhorst_step.  Generally preferred to Tauchen for rho close to one.
    """

    _check_ar1_parameters(rho, sigma, N)

    std_y = sigma / np.sqrt(1 - rho ** 2)
    ymax = np.sqrt(N - 1) * std_y
    grid = _symmetric_grid(ymax, N)

    p = (1 + rho) / 2
    q = p
    transition_matrix = np.array([[p, 1 - p], [1 - q, q]])
    for _ in range(2, N):
        transition_matrix = rouwenhorst_step(transition_matrix, p, q)

    _check_stochastic(transition_matrix, "Rouwenhorst", tol)
    return transition_matrix, grid


def markov_approx(rho, sigma, m=DEFAULT_M, N=DEFAULT_N, method="tauchen"):
    """Returns transition matrix, stationary distribution and grid approximating an AR(1) process

    Parameters
    ----------
    rho : float
        Autocorrelation coefficient, abs(rho) < 1
    sigma : float
        Standard deviation of the Gaussian white noise u_t
    m : float, optional
        Width of the state space for Tauchen, ignored by Rouwenhorst.  Default is 3.
    N : int, optional
        Number of states.  Default is 9.
    method : {`tauchen`, `rouwenhorst`}
        Discretization method (case insensitive)

    Returns
    -------
    MarkovApproximation
        Named tuple of (transition_matrix, stationary_distribution, grid)

    Examples
    --------
    >>> approx = markov_approx(0.5, 1, 3, 3)
    >>> approx.grid
    array([-3.46410162,  0.        ,  3.46410162])
    """

    method_name = str(method).lower()
    if method_name == "tauchen":
        transition_matrix, grid = tauchen(rho, sigma, m, N)
    elif method_name == "rouwenhorst":
        transition_matrix, grid = rouwenhorst(rho, sigma, N)
    else:
        raise InvalidArgument(f"method must be 'tauchen' or 'rouwenhorst', got {method!r}")
    return MarkovApproximation(transition_matrix, stationary_distr(transition_matrix), grid)
