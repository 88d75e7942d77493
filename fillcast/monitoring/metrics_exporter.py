"""Prometheus metrics for spread distributions and fill-rate predictions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, start_http_server

if TYPE_CHECKING:
    from fillcast.common.types import RatePrediction
    from fillcast.execution.fill_estimator import RollingDistribution

# Gauges (current state)
generation_count_gauge = Gauge(
    "fillcast_generation_observations", "Observations in the current generation", ["distribution"]
)
storage_size_gauge = Gauge(
    "fillcast_retained_observations", "Observations retained across generations", ["distribution"]
)
predicted_rate_gauge = Gauge(
    "fillcast_predicted_fill_rate", "Latest profit-maximizing fill rate", ["distribution"]
)
predicted_profit_gauge = Gauge(
    "fillcast_predicted_profit", "Expected profit at the latest predicted fill rate", ["distribution"]
)

# Counters (cumulative)
windows_rolled_counter = Counter(
    "fillcast_windows_rolled_total", "Measurement windows closed", ["distribution"]
)


def start_metrics_server(port: int = 9090) -> None:
    """Start the Prometheus metrics HTTP server."""
    start_http_server(port)


def update_distribution_metrics(dist: RollingDistribution) -> None:
    """Publish the current generation and storage sizes."""
    generation_count_gauge.labels(distribution=dist.name).set(dist.count())
    storage_size_gauge.labels(distribution=dist.name).set(dist.storage_size())


def record_window_rolled(name: str) -> None:
    windows_rolled_counter.labels(distribution=name).inc()


def record_prediction(name: str, prediction: RatePrediction) -> None:
    predicted_rate_gauge.labels(distribution=name).set(prediction.rate)
    predicted_profit_gauge.labels(distribution=name).set(prediction.profit)
