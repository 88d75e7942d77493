"""Domain types for fill-rate estimation."""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel, Field


class ProbabilityPolicy(StrEnum):
    CLAMP = "clamp"
    REJECT = "reject"


class RatePrediction(NamedTuple):
    """Profit-maximizing fill rate and the expected profit at that rate."""

    rate: float
    profit: float


class DistributionSummary(BaseModel):
    count: int = Field(ge=0)
    storage_size: int = Field(ge=0)
    mean: float = 0.0
    std: float = 0.0
    excess_kurtosis: float = 0.0
    min: float = 0.0
    max: float = 0.0
