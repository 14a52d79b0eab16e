"""Error types raised by the qsomap core.

All of them derive from ValueError so callers that already guard numeric
input with ``except ValueError`` keep working.
"""


class QsoMapError(ValueError):
    """Base class for qsomap errors."""


class InvalidFormat(QsoMapError):
    """Raised when a Maidenhead locator fails structural validation."""


class OutOfRange(QsoMapError):
    """Raised when a latitude/longitude lies outside the valid global bounds."""


class DegenerateInput(QsoMapError):
    """Raised when a metric is undefined for the input (e.g. zero distance)."""
