"""Exception and warning types raised by PyChebFit.

Each type subclasses the builtin that callers would otherwise catch, so
``except ValueError`` and ``except RuntimeError`` keep working.
"""


class ConfigurationError(ValueError):
    """Invalid domain, dimension count, degree or node count."""


class NotFittedError(RuntimeError):
    """The approximation was used before :meth:`ChebyshevFit.fit` succeeded."""


class InsufficientSamplesWarning(UserWarning):
    """Fewer samples per dimension than coefficients; the count was raised."""
