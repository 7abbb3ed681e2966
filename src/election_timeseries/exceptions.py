"""
Error types raised by the election time series analyzer.
"""


class ValidationError(ValueError):
    """A structural precondition on a snapshot or time series failed."""


class PreconditionError(AssertionError):
    """
    A heuristic was invoked on a snapshot pair that violates its precondition.

    Validated input never triggers this, so it signals a bug upstream.
    """


class ParseError(ValueError):
    """Malformed external (JSON) representation of a time series or report."""
