"""Configuration loading, validation, and defaults."""

from riskbook.config.loader import load_config
from riskbook.config.schema import RiskbookConfig

__all__ = ["load_config", "RiskbookConfig"]
