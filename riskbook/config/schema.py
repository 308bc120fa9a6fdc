"""Pydantic models for riskbook config validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from riskbook.config.defaults import MARKET_DATA, OUTPUT


# ---------------------------------------------------------------------------
# Market Data Config
# ---------------------------------------------------------------------------

class MarketDataConfig(BaseModel):
    enabled: bool = True
    period: str = MARKET_DATA["period"]
    interval: str = MARKET_DATA["interval"]
    trading_days: int = MARKET_DATA["trading_days"]
    min_closes: int = MARKET_DATA["min_closes"]
    min_returns: int = MARKET_DATA["min_returns"]

    @field_validator("trading_days")
    @classmethod
    def trading_days_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"trading_days must be > 0, got {v}")
        return v

    @model_validator(mode="after")
    def history_lengths_consistent(self) -> "MarketDataConfig":
        if self.min_returns < 2:
            raise ValueError(f"min_returns must be >= 2, got {self.min_returns}")
        if self.min_closes <= self.min_returns:
            raise ValueError(
                f"min_closes ({self.min_closes}) must exceed "
                f"min_returns ({self.min_returns})"
            )
        return self


# ---------------------------------------------------------------------------
# Output Config
# ---------------------------------------------------------------------------

class OutputConfig(BaseModel):
    precision: int = OUTPUT["precision"]
    matrix_precision: int = OUTPUT["matrix_precision"]
    percent_precision: int = OUTPUT["percent_precision"]

    @field_validator("precision", "matrix_precision", "percent_precision")
    @classmethod
    def precision_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"precision must be >= 0, got {v}")
        return v


# ---------------------------------------------------------------------------
# Top-Level Config
# ---------------------------------------------------------------------------

class RiskbookConfig(BaseModel):
    """Root configuration model for riskbook."""

    version: int = 1
    market_data: MarketDataConfig = Field(default_factory=MarketDataConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="before")
    @classmethod
    def coerce_none_to_defaults(cls, data: Any) -> Any:
        """YAML parses empty keys as None. Coerce to proper defaults."""
        if isinstance(data, dict):
            for key in ("market_data", "output"):
                if key in data and data[key] is None:
                    data[key] = {}
        return data
