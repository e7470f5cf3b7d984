"""
Exception and warning hierarchy for pycovstruct.

All exceptions inherit from CovStructError so callers can catch any
library-specific failure. Conditions an optimizer may pass through
transiently are reported as warnings (subclasses of CovStructWarning)
and the computed result is still returned.
"""

from __future__ import annotations


class CovStructError(Exception):
    """Base exception for all pycovstruct errors."""
    pass


class DimensionMismatch(CovStructError, ValueError):
    """
    Parameter vector or coordinates have the wrong size for a structure.

    Attributes:
        kind: Structure tag the check was made for
        expected: Required length
        actual: Supplied length
    """

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.expected = expected
        self.actual = actual


class InvalidCoordinateEncoding(CovStructError, ValueError):
    """
    A coordinate-factor level name could not be decoded.

    Attributes:
        level: The offending level string
    """

    def __init__(self, message: str, level: object = None):
        super().__init__(message)
        self.level = level


class CovStructWarning(UserWarning):
    """Base class for pycovstruct warnings."""
    pass


class NonPositiveDefiniteResult(CovStructWarning):
    """
    A constructed covariance or correlation matrix is not positive
    semi-definite.

    Attributes:
        kind: Structure tag
        min_eigenvalue: Smallest eigenvalue of the correlation matrix
    """

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        min_eigenvalue: float | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.min_eigenvalue = min_eigenvalue


class NaNFunctionEvaluationWarning(CovStructWarning):
    """A log-density or objective evaluated to NaN."""
    pass


class ValueOutOfRangeWarning(CovStructWarning):
    """
    Theta entries are large enough that exp() overflows or underflows.

    Attributes:
        indices: Positions in theta that are out of range
    """

    def __init__(self, message: str, indices: list[int] | None = None):
        super().__init__(message)
        self.indices = indices or []
