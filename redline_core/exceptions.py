"""
Custom exceptions for the redlining engine.

The public engine functions recover from these locally and return a
renderable fallback; they exist so failures carry a precise type in logs.
"""


class RedlineError(Exception):
    """Base exception for redlining errors."""
    pass


class NormalizationError(RedlineError):
    """A text cleanup pattern failed on the given input."""
    pass


class DiffComputationError(RedlineError):
    """The word diff could not be computed for the given inputs."""
    pass


class RecordParseError(RedlineError):
    """A raw row could not be parsed into a Record."""
    pass
