"""PyChebFit: multi-dimensional Chebyshev least-squares approximation.

Provides the :class:`ChebyshevFit` class, which samples a function on a
tensor grid of Chebyshev–Gauss nodes, fits tensor-product Chebyshev
coefficients with a column-pivoted QR least-squares solve, and evaluates
the resulting expansion at arbitrary points of an axis-aligned box. The
building blocks (nodes, basis recurrence, domain maps) are exported for
direct use.

Example
-------
>>> import math
>>> from pychebfit import ChebyshevFit
>>> def f(x, _):
...     return math.cos(x[0]) + 0.3 * x[0]**3 + 2 * x[0]**2 + x[0] - 10
>>> cheb = ChebyshevFit(f, 1)
>>> cheb.fit(6, verbose=False)
>>> round(cheb.approximate(0.5), 4)
-8.0849
"""

from pychebfit._version import __version__
from pychebfit._basis import chebyshev_nodes, chebyshev_polynomials
from pychebfit._domain import to_canonical, to_physical
from pychebfit._exceptions import ConfigurationError, InsufficientSamplesWarning, NotFittedError
from pychebfit.approximation import ChebyshevFit

__all__ = [
    "ChebyshevFit",
    "ConfigurationError",
    "InsufficientSamplesWarning",
    "NotFittedError",
    "chebyshev_nodes",
    "chebyshev_polynomials",
    "to_canonical",
    "to_physical",
    "__version__",
]
