"""Tests for YAML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from fillcast.common.config import AppConfig, load_config
from fillcast.common.errors import ConfigError
from fillcast.common.types import ProbabilityPolicy


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        cfg = load_config(tmp_path / "absent.yaml")
        assert cfg == AppConfig()
        assert cfg.fill_model.probability_policy is ProbabilityPolicy.CLAMP
        assert cfg.fill_model.window_size == 60

    def test_env_var_resolution(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text(
            "fill_model:\n"
            "  probability_policy: ${POLICY:clamp}\n"
            "  min_spread: ${MIN_SPREAD:0.5}\n"
        )
        monkeypatch.setenv("POLICY", "reject")
        monkeypatch.delenv("MIN_SPREAD", raising=False)

        cfg = load_config(path)
        assert cfg.fill_model.probability_policy is ProbabilityPolicy.REJECT
        assert cfg.fill_model.min_spread == pytest.approx(0.5)

    def test_shipped_default_config_loads(self) -> None:
        path = Path(__file__).resolve().parents[2] / "config" / "default.yaml"
        cfg = load_config(path)
        assert cfg.monitoring.enabled is False

    def test_invalid_policy_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("fill_model:\n  probability_policy: ignore\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_positive_window_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("fill_model:\n  window_size: 0\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("")
        assert load_config(path) == AppConfig()
