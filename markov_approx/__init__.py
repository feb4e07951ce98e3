from .exceptions import InvalidArgument, NumericalFailure, StochasticityWarning
from .markov_chain_metrics import is_stochastic, rows_not_summing_to_one, stationary_distr
from .discretization import MarkovApproximation, markov_approx, rouwenhorst, tauchen
from .utility import CFEUtility, CRRAUtility, LogUtility, derivative
