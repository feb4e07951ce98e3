import numpy as np
import scipy.linalg

from .exceptions import InvalidArgument, NumericalFailure

"""
Checks and quantities associated with markov chains of a given transition
matrix (row stochasticity and stationary distribution)
"""

STOCHASTIC_TOL = 5e-15
RESIDUAL_TOL = 1e-8


def _is_square(transition_matrix):
    return transition_matrix.ndim == 2 and transition_matrix.shape[0] == transition_matrix.shape[1]


def rows_not_summing_to_one(transition_matrix, tol=STOCHASTIC_TOL):
    """Returns the indices of the rows of a transition matrix that do not sum to one

    Parameters
    ----------
    transition_matrix : array_like
        2-D array, where the (i,j)th element is the probability of transitioning from state i to state j
    tol : float, optional
        A row is flagged when the absolute deviation of its sum from one is at least `tol`.
        Default is STOCHASTIC_TOL (5e-15).

    Returns
    -------
    rows : ndarray
        1-D integer array of (0-based) row indices, empty if every row sums to one

    Raises
    ------
    InvalidArgument
        If the matrix is not square
    """

    transition_matrix = np.asarray(transition_matrix, dtype=float)
    if not _is_square(transition_matrix):
        raise InvalidArgument(
            f"transition_matrix must be a square 2-D array, got shape {transition_matrix.shape}"
        )
    deviation = np.absolute(np.sum(transition_matrix, axis=1) - 1)
    return np.flatnonzero(deviation >= tol)


def is_stochastic(transition_matrix, tol=STOCHASTIC_TOL):
    """Checks whether a square matrix is row stochastic within numerical tolerance

    Parameters
    ----------
    transition_matrix : array_like
        2-D array, where the (i,j)th element is the probability of transitioning from state i to state j
    tol : float, optional
        Largest allowed absolute deviation of a row sum from one (exclusive).
        Default is STOCHASTIC_TOL (5e-15).

    Returns
    -------
    bool
        True if the matrix is square and the maximum deviation of its row sums from one is below `tol`

    Notes
    -----
    Only row sums are checked, negative entries are not looked for.
    """

    transition_matrix = np.asarray(transition_matrix, dtype=float)
    if not _is_square(transition_matrix) or transition_matrix.size == 0:
        return False
    max_deviation = np.max(np.absolute(np.sum(transition_matrix, axis=1) - 1))
    return bool(max_deviation < tol)


def stationary_distr(transition_matrix):
    """Calculates the stationary distribution for a Markov chain from its transition matrix

    Parameters
    ----------
    transition_matrix : array_like
        2-D array, where the (i,j)th element is the probability of transitioning from state i to state j.
        Rows must sum to one within STOCHASTIC_TOL.

    Returns
    -------
    stationary_distribution : ndarray
        The stationary distribution of the Markov chain, where the ith element gives the long run
        probability of the ith state.  Satisfies mu @ P = mu and sums to one.

    Raises
    ------
    InvalidArgument
        If the matrix is not square or is not row stochastic.
    NumericalFailure
        If the reduced linear system is singular, which happens when the chain is reducible
        (eigenvalue one is not simple), or if the solution is too inaccurate to satisfy
        max|mu P - mu| < RESIDUAL_TOL (1e-8).

    Notes
    -----
    mu is a right eigenvector of P' with eigenvalue one.  Rather than doing a full eigen-decomposition,
    the first coordinate of the unnormalized eigenvector is fixed at one and the remaining N-1
    coordinates solve (I - A[1:, 1:]) x = A[1:, 0] with A = P'.  The result [1, x] is then normalized.
    """

    transition_matrix = np.asarray(transition_matrix, dtype=float)
    if not _is_square(transition_matrix):
        raise InvalidArgument(
            f"transition_matrix must be a square 2-D array, got shape {transition_matrix.shape}"
        )
    if not is_stochastic(transition_matrix):
        rows = rows_not_summing_to_one(transition_matrix)
        raise InvalidArgument(
            f"transition_matrix is not row stochastic, rows {rows.tolist()} do not sum to one"
        )

    num_states = transition_matrix.shape[0]
    if num_states == 1:
        return np.ones(1)

    A = transition_matrix.T
    lhs = np.eye(num_states - 1) - A[1:, 1:]
    rhs = A[1:, 0]
    try:
        x = scipy.linalg.solve(lhs, rhs)
    except np.linalg.LinAlgError as err:
        raise NumericalFailure(
            "Could not solve for the stationary distribution, the chain may be reducible: "
            f"{err}"
        ) from err

    stationary_distribution = np.concatenate(([1.0], x))
    if not np.all(np.isfinite(stationary_distribution)):
        raise NumericalFailure("Stationary distribution has non-finite entries")
    stationary_distribution /= np.sum(stationary_distribution)
    residual = np.max(np.absolute(stationary_distribution.dot(transition_matrix) - stationary_distribution))
    if residual >= RESIDUAL_TOL:
        raise NumericalFailure(
            f"Stationary distribution is not invariant, max |mu P - mu| = {residual:.3g}"
        )
    return stationary_distribution
