"""Tests for the configuration system."""

from __future__ import annotations

import os

import pytest
import yaml

from riskbook.config.defaults import (
    CSV_COLUMNS,
    CSV_EXPORT_COLUMNS,
    MARKET_DATA,
    MATRIX_TOLERANCE,
    OUTPUT,
)
from riskbook.config.loader import _expand_env_vars, load_config
from riskbook.config.schema import RiskbookConfig


class TestDefaults:
    """Verify defaults are present and consistent."""

    def test_market_data_history_lengths(self):
        assert MARKET_DATA["min_closes"] > MARKET_DATA["min_returns"] >= 2
        assert MARKET_DATA["trading_days"] == 252

    def test_export_columns_extend_import_columns(self):
        assert CSV_EXPORT_COLUMNS[: len(CSV_COLUMNS)] == CSV_COLUMNS

    def test_tolerance_small(self):
        assert 0 < MATRIX_TOLERANCE < 1e-6

    def test_output_precisions(self):
        assert all(v >= 0 for v in OUTPUT.values())


class TestConfigLoading:
    """Test config file loading and validation."""

    def test_load_defaults_no_file(self):
        config = load_config("/nonexistent/path.yaml")
        assert isinstance(config, RiskbookConfig)
        assert config.version == 1
        assert config.market_data.trading_days == 252
        assert config.output.precision == 6

    def test_load_from_yaml(self, tmp_path):
        yaml_content = {
            "version": 1,
            "market_data": {"period": "2y", "min_returns": 60, "min_closes": 61},
            "output": {"percent_precision": 3},
        }
        config_file = tmp_path / "riskbook.yaml"
        with open(config_file, "w") as f:
            yaml.dump(yaml_content, f)

        config = load_config(str(config_file))
        assert config.market_data.period == "2y"
        assert config.market_data.min_returns == 60
        assert config.output.percent_precision == 3
        assert config.output.precision == 6

    def test_cwd_config_found(self, tmp_path, monkeypatch):
        (tmp_path / "riskbook.yaml").write_text("output:\n  precision: 4\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().output.precision == 4

    def test_empty_sections_use_defaults(self, tmp_path):
        config_file = tmp_path / "riskbook.yaml"
        config_file.write_text("version: 1\nmarket_data:\noutput:\n")
        config = load_config(config_file)
        assert config.market_data.enabled is True
        assert config.output.matrix_precision == 3

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "riskbook.yaml"
        config_file.write_text("")
        assert load_config(config_file) == RiskbookConfig()

    def test_env_var_in_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RISKBOOK_TEST_PERIOD", "6mo")
        config_file = tmp_path / "riskbook.yaml"
        config_file.write_text("market_data:\n  period: ${RISKBOOK_TEST_PERIOD}\n")
        assert load_config(config_file).market_data.period == "6mo"

    def test_invalid_file_rejected(self, tmp_path):
        config_file = tmp_path / "riskbook.yaml"
        config_file.write_text("market_data:\n  trading_days: 0\n")
        with pytest.raises(ValueError):
            load_config(config_file)

    def test_env_var_expansion(self):
        os.environ["TEST_RISKBOOK_KEY"] = "secret123"
        try:
            result = _expand_env_vars("key=${TEST_RISKBOOK_KEY}")
            assert result == "key=secret123"
        finally:
            del os.environ["TEST_RISKBOOK_KEY"]

    def test_env_var_missing_returns_empty(self):
        result = _expand_env_vars("${NONEXISTENT_VAR_12345}")
        assert result == ""

    def test_nested_env_expansion(self):
        os.environ["TEST_VAL"] = "hello"
        try:
            result = _expand_env_vars({"key": "${TEST_VAL}", "nested": {"deep": "${TEST_VAL}", "n": 3}})
            assert result == {"key": "hello", "nested": {"deep": "hello", "n": 3}}
        finally:
            del os.environ["TEST_VAL"]


class TestConfigSchema:
    """Test Pydantic schema validation."""

    def test_full_default_config_valid(self):
        config = RiskbookConfig()
        assert config.market_data.period == "1y"
        assert config.market_data.interval == "1d"
        assert config.market_data.min_closes == 30
        assert config.market_data.min_returns == 20

    def test_trading_days_positive(self):
        with pytest.raises(ValueError):
            RiskbookConfig(market_data={"trading_days": -1})

    def test_min_returns_at_least_two(self):
        with pytest.raises(ValueError, match="min_returns"):
            RiskbookConfig(market_data={"min_returns": 1})

    def test_min_closes_exceeds_min_returns(self):
        with pytest.raises(ValueError, match="must exceed"):
            RiskbookConfig(market_data={"min_closes": 20, "min_returns": 20})

    def test_negative_precision_rejected(self):
        with pytest.raises(ValueError):
            RiskbookConfig(output={"precision": -1})

    def test_market_data_can_be_disabled(self):
        assert RiskbookConfig(market_data={"enabled": False}).market_data.enabled is False
