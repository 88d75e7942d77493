"""Exception hierarchy for the fill-rate estimator."""

from __future__ import annotations


class FillcastError(Exception):
    """Base exception for all fillcast errors."""


class DistributionError(FillcastError):
    """Errors raised by a rolling spread distribution."""


class InvalidProbabilityError(DistributionError, ValueError):
    """Probability argument is NaN or outside [0, 1] under the reject policy."""


class ConfigError(FillcastError):
    """Errors related to configuration loading or validation."""
