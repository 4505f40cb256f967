"""Exceptions for contract breaches between pipeline stages.

Expected classification failures are never raised: they come back as EraseResult.
"""


class SwapTraceError(Exception):
    """Base for all swaptrace exceptions."""


class InvariantViolation(SwapTraceError):
    """An upstream stage handed a later stage input it promised never to produce."""
