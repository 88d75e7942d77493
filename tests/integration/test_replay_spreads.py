"""Integration test: replay a spread CSV through the CLI."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from click.testing import CliRunner

from scripts.replay_spreads import main


@pytest.fixture
def spreads_csv(tmp_path: Path) -> Path:
    path = tmp_path / "spreads.csv"
    pd.DataFrame({"spread": [float(v) for v in range(1, 11)]}).to_csv(path, index=False)
    return path


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    return str(tmp_path / "missing.yaml")


class TestReplaySpreads:
    def test_reports_each_generation(self, spreads_csv: Path, config_path: str) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, [str(spreads_csv), "--config", config_path, "--window", "5"]
        )

        assert result.exit_code == 0, result.output
        assert "generation=1 retained=5 rate=0.4000 profit=0.800000" in result.output
        assert "generation=2 retained=5 rate=0.4000 profit=2.000000" in result.output
        assert "summary retained=5 mean=8.000000" in result.output

    def test_min_spread_override(self, spreads_csv: Path, config_path: str) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            [str(spreads_csv), "--config", config_path, "--window", "10", "--min-spread", "6"],
        )

        assert result.exit_code == 0, result.output
        assert "generation=1 retained=10 rate=0.3000 profit=1.800000" in result.output

    def test_unknown_column_rejected(self, spreads_csv: Path, config_path: str) -> None:
        runner = CliRunner()
        result = runner.invoke(main, [str(spreads_csv), "--config", config_path, "--column", "ask"])
        assert result.exit_code != 0
        assert "ask" in result.output

    def test_zero_window_rejected(self, spreads_csv: Path, config_path: str) -> None:
        runner = CliRunner()
        result = runner.invoke(main, [str(spreads_csv), "--config", config_path, "--window", "0"])
        assert result.exit_code != 0
        assert "--window" in result.output
