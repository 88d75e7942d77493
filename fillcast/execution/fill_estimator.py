"""Rolling spread distribution for fill-rate forecasting.

Spreads realized over successive measurement periods are appended as they
arrive. Readers ask for empirical percentile cut-points and for the fill
rate that maximizes ``spread * rate`` over the observed distribution.

Storage keeps at most two generations: the one being filled and the one
completed before it. A generation is retained through the first
``roll_window()`` after it completes, so a query issued right after a roll
still sees data, and is purged on the next one.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from fillcast.common.errors import InvalidProbabilityError
from fillcast.common.locks import ReadWriteLock
from fillcast.common.logging import get_logger
from fillcast.common.types import DistributionSummary, ProbabilityPolicy, RatePrediction

if TYPE_CHECKING:
    from fillcast.common.config import FillModelConfig

logger = get_logger(__name__)


def _cut_point(ordered: np.ndarray, probability: float) -> float:
    """Value just past the cumulative-probability point of a sorted array.

    The element at ``floor(n * p)`` itself is skipped and the next, more
    extreme one is returned. Returns 0.0 when no such element exists.
    """
    point = math.floor(len(ordered) * probability)
    if len(ordered) <= point + 1:
        return 0.0
    return float(ordered[point + 1])


class RollingDistribution:
    """Thread-safe two-generation store of spread observations."""

    def __init__(
        self,
        name: str = "default",
        probability_policy: ProbabilityPolicy = ProbabilityPolicy.CLAMP,
    ) -> None:
        self.name = name
        self._probability_policy = ProbabilityPolicy(probability_policy)
        self._lock = ReadWriteLock()
        self._values: list[float] = []
        self._count = 0  # appended since the last roll

    @classmethod
    def from_config(cls, config: FillModelConfig, name: str = "default") -> RollingDistribution:
        return cls(name=name, probability_policy=config.probability_policy)

    def append(self, value: float) -> None:
        """Record one observation in the current generation."""
        with self._lock.write():
            self._values.append(float(value))
            self._count += 1

    def count(self) -> int:
        """Number of observations in the current generation."""
        with self._lock.read():
            return self._count

    def storage_size(self) -> int:
        """Total retained observations, current plus previous generation."""
        with self._lock.read():
            return len(self._values)

    def __len__(self) -> int:
        return self.storage_size()

    def roll_window(self) -> None:
        """Close the current generation.

        If everything stored belongs to the generation just closed, it is
        kept whole. Otherwise the oldest ``count()`` observations are
        dropped, which purges the generation before the one just closed.
        """
        with self._lock.write():
            dropped = 0
            if self._count != len(self._values):
                dropped = self._count
                del self._values[:dropped]
            self._count = 0
            retained = len(self._values)

        logger.debug(
            "window_rolled",
            distribution=self.name,
            dropped=dropped,
            retained=retained,
        )

    def snapshot(self) -> list[float]:
        """Copy of the retained observations in arrival order."""
        with self._lock.read():
            return list(self._values)

    def _check_probability(self, probability: float) -> float:
        if math.isnan(probability):
            raise InvalidProbabilityError("probability must not be NaN")
        if 0.0 <= probability <= 1.0:
            return probability
        if self._probability_policy is ProbabilityPolicy.REJECT:
            raise InvalidProbabilityError(f"probability {probability} outside [0, 1]")
        return min(max(probability, 0.0), 1.0)

    def _sorted(self, descending: bool) -> np.ndarray:
        # NaN ranks below every number, ahead of them ascending and behind them descending
        values = np.asarray(self._values, dtype=float)
        nan_mask = np.isnan(values)
        ordered = np.concatenate([values[nan_mask], np.sort(values[~nan_mask])])
        return ordered[::-1] if descending else ordered

    def threshold(self, descending: bool, probability: float) -> float:
        """Empirical percentile cut-point of the retained spreads.

        Args:
            descending: Rank from the widest spread down instead of the
                narrowest up
            probability: Cumulative probability in [0, 1]

        Returns:
            The value one rank past ``floor(n * probability)`` in the chosen
            order, or 0.0 when storage is empty or the tail is too short
        """
        probability = self._check_probability(float(probability))
        with self._lock.read():
            if not self._values:
                return 0.0
            return _cut_point(self._sorted(descending), probability)

    def predict(self, target_threshold: float) -> RatePrediction:
        """Fill rate that maximizes ``spread(rate) * rate``.

        ``spread(rate)`` is the descending threshold at ``rate``. Rates whose
        spread falls below ``target_threshold`` earn nothing. Ties keep the
        lowest rate. Empty storage yields ``RatePrediction(0.0, 0.0)``.
        """
        with self._lock.read():
            n = len(self._values)
            if n == 0:
                logger.debug("predict_on_empty_distribution", distribution=self.name)
                return RatePrediction(0.0, 0.0)

            ordered = self._sorted(descending=True)
            base = 1 / n
            best_index = 0
            best_profit = 0.0
            for i in range(n):
                ratio = i * base
                spread = _cut_point(ordered, ratio)
                if spread < target_threshold:
                    continue
                profit = spread * ratio
                if best_profit < profit:
                    best_profit = profit
                    best_index = i

        return RatePrediction(best_index * base, best_profit)

    def summary(self) -> DistributionSummary:
        """Descriptive statistics over the retained observations."""
        with self._lock.read():
            count = self._count
            values = np.asarray(self._values, dtype=float)

        if values.size == 0:
            return DistributionSummary(count=count, storage_size=0)

        mean = float(values.mean())
        std = float(values.std(ddof=1)) if values.size > 1 else 0.0
        centered = values - mean
        m2 = float(np.mean(centered**2))
        excess_kurtosis = float(np.mean(centered**4)) / m2**2 - 3.0 if m2 > 0 else 0.0

        return DistributionSummary(
            count=count,
            storage_size=int(values.size),
            mean=mean,
            std=std,
            excess_kurtosis=excess_kurtosis,
            min=float(values.min()),
            max=float(values.max()),
        )
