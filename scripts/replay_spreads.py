"""CLI script to replay recorded spreads through a rolling distribution."""

from __future__ import annotations

import click
import pandas as pd

from fillcast.common.config import load_config
from fillcast.common.logging import get_logger, setup_logging
from fillcast.execution.fill_estimator import RollingDistribution
from fillcast.monitoring.metrics_exporter import (
    record_prediction,
    record_window_rolled,
    start_metrics_server,
    update_distribution_metrics,
)

logger = get_logger(__name__)


@click.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", default="config/default.yaml", help="Config file path")
@click.option("--column", default="spread", help="CSV column holding spread values")
@click.option("--window", default=None, type=int, help="Rows per generation (overrides config)")
@click.option(
    "--min-spread", default=None, type=float, help="Minimum profitable spread (overrides config)"
)
def main(
    csv_path: str,
    config_path: str,
    column: str,
    window: int | None,
    min_spread: float | None,
) -> None:
    """Feed spreads from CSV_PATH and report the predicted fill rate per window."""
    cfg = load_config(config_path)
    setup_logging(cfg.logging.level, cfg.logging.json_output)

    window_size = window if window is not None else cfg.fill_model.window_size
    target = min_spread if min_spread is not None else cfg.fill_model.min_spread
    if window_size <= 0:
        raise click.BadParameter("must be positive", param_hint="--window")

    frame = pd.read_csv(csv_path)
    if column not in frame.columns:
        raise click.BadParameter(f"column {column!r} not found in {csv_path}", param_hint="--column")
    spreads = frame[column].dropna().astype(float)

    if cfg.monitoring.enabled:
        start_metrics_server(cfg.monitoring.prometheus_port)

    dist = RollingDistribution.from_config(cfg.fill_model, name=column)
    generation = 0
    for row, value in enumerate(spreads, start=1):
        dist.append(value)
        if row % window_size:
            continue

        prediction = dist.predict(target)
        dist.roll_window()
        generation += 1
        record_window_rolled(dist.name)
        record_prediction(dist.name, prediction)
        update_distribution_metrics(dist)
        click.echo(
            f"generation={generation} retained={dist.storage_size()} "
            f"rate={prediction.rate:.4f} profit={prediction.profit:.6f}"
        )

    summary = dist.summary()
    logger.info("replay_done", rows=len(spreads), generations=generation)
    click.echo(
        f"summary retained={summary.storage_size} mean={summary.mean:.6f} "
        f"std={summary.std:.6f} kurtosis={summary.excess_kurtosis:.4f}"
    )


if __name__ == "__main__":
    main()
