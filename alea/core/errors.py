"""
Alea Exceptions
================

Exception taxonomy shared by the sampling, statistics and hashing layers.
Every error is raised synchronously to the caller; nothing is retried
except the sampler's internal rejection loop, which is not an error path.
"""

from __future__ import annotations


class AleaError(Exception):
    """Base class for all Alea errors."""


class InvalidArgumentError(AleaError, ValueError):
    """An argument is outside its domain (bound < 1, empty input, ...)."""


class DimensionMismatchError(InvalidArgumentError):
    """Vectors combined into a contingency table differ in length."""


class DegenerateDistributionError(AleaError, ArithmeticError):
    """A contingency table has a zero expected value in some cell.

    Raised instead of letting the chi-squared statistic become NaN or
    infinite.
    """


class ExhaustedSourceError(AleaError, RuntimeError):
    """A random byte source could not produce the requested bytes."""


class HashFormatError(InvalidArgumentError):
    """A stored password hash string cannot be parsed."""
