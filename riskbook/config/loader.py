"""Load riskbook.yaml into a validated RiskbookConfig.

Lookup: explicit path, ./riskbook.yaml, ~/.riskbook/config.yaml, then
built-in defaults. String values may reference ${ENV_VAR}.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from riskbook.config.schema import RiskbookConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = (
    Path("riskbook.yaml"),
    Path("~/.riskbook/config.yaml"),
)

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")


def _expand_env_vars(value: Any) -> Any:
    """Substitute ${VAR} in strings, descending into mappings; unset vars become ""."""
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), value)
    return value


def _resolve_path(explicit: str | Path | None) -> Path | None:
    if explicit is not None:
        path = Path(explicit).expanduser()
        if not path.exists():
            logger.warning("Config file not found: %s (using defaults)", path)
            return None
        return path
    return next(
        (p.expanduser() for p in DEFAULT_CONFIG_PATHS if p.expanduser().exists()),
        None,
    )


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return _expand_env_vars(raw) if raw else {}


def load_config(path: str | Path | None = None) -> RiskbookConfig:
    """Resolve, read and validate the configuration.

    Raises:
        pydantic.ValidationError: the file contents fail validation.
    """
    resolved = _resolve_path(path)
    if resolved is None:
        logger.debug("No riskbook config file, using defaults")
        raw: dict[str, Any] = {}
    else:
        logger.info("Loading config from %s", resolved)
        raw = _read_yaml(resolved)

    return RiskbookConfig.model_validate(raw)
