"""Centralized configuration loader for YAML-based configuration.

This module provides functions to load configuration from YAML files with:
- Environment variable overrides (env var → YAML → defaults)
- Type coercion (string to float, bool, int)
- Schema validation using dataclasses
- Graceful degradation (missing files use defaults)
"""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml  # type: ignore

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """
    Get project root directory.

    Uses pattern: config_loader.py → core/ → sheet_chat/ → src/ → project_root

    Returns:
        Path to project root directory (may lack a config/ directory when the
        package is installed outside a checkout; loaders fall back to defaults)
    """
    return Path(__file__).parent.parent.parent.parent


def _default_config_path(filename: str) -> Path:
    return get_project_root() / "config" / filename


def _coerce_type(value: Any, target_type: type) -> Any:
    """
    Coerce value to target type.

    Handles:
    - String "30.0" → float 30.0
    - String "true"/"false" → bool True/False (case-insensitive)
    - String "123" → int 123

    Raises:
        ValueError: If coercion fails
    """
    if value is None:
        return None

    if isinstance(value, target_type) and not (target_type is int and isinstance(value, bool)):
        return value

    if target_type is bool:
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        return bool(value)

    if target_type is float:
        return float(value)

    if target_type is int:
        if isinstance(value, str):
            return int(float(value))  # Handle "30.0" → 30
        return int(value)

    if target_type is str:
        return str(value)

    return value


def _apply_env_overrides(config: dict[str, Any], env_mapping: dict[str, str]) -> dict[str, Any]:
    """
    Apply environment variable overrides to config.

    Args:
        config: Configuration dictionary
        env_mapping: Env var name → config key

    Returns:
        Config with env var overrides applied
    """
    result = config.copy()
    for env_key, config_key in env_mapping.items():
        env_value = os.getenv(env_key)
        if env_value is None or config_key not in result:
            continue
        target_type = type(result[config_key])
        try:
            result[config_key] = _coerce_type(env_value, target_type)
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to coerce env var {env_key}={env_value} to {target_type.__name__}: {e}")
    return result


def _read_yaml(config_path: Path) -> dict[str, Any]:
    """Read a YAML mapping; missing file → {}; invalid YAML → ValueError."""
    if not config_path.exists():
        logger.debug(f"Config file not found at {config_path}, using defaults")
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config in {config_path}: expected a mapping, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class QueryConfig:
    """
    Keyword vocabularies and thresholds for query interpretation.

    Scan order of every tuple is significant: the first match wins.
    """

    filter_keywords: tuple[str, ...] = ("filter", "show", "only", "which", "where")
    sort_keywords: tuple[str, ...] = ("sort", "order by", "arrange")
    summarize_keywords: tuple[str, ...] = ("summarize", "summary", "stats", "statistics", "count")
    filter_values: tuple[str, ...] = ("ok", "not ok", "yes", "no", "true", "false", "pass", "fail")
    descending_keywords: tuple[str, ...] = ("descending", "desc", "high to low", "largest", "highest")
    summary_row_threshold: int = 10
    categorical_max_distinct: int = 10
    distribution_top_n: int = 3


_KEYWORD_FIELDS = (
    "filter_keywords",
    "sort_keywords",
    "summarize_keywords",
    "filter_values",
    "descending_keywords",
)

_QUERY_ENV_MAPPING = {
    "SUMMARY_ROW_THRESHOLD": "summary_row_threshold",
    "CATEGORICAL_MAX_DISTINCT": "categorical_max_distinct",
    "DISTRIBUTION_TOP_N": "distribution_top_n",
}


def load_query_config(config_path: Path | None = None) -> QueryConfig:
    """
    Load query interpretation config from YAML with env var overrides.

    Precedence: Environment variable → YAML value → Default value.
    Keyword lists are lower-cased; unknown keys are ignored.

    Args:
        config_path: Optional path to config file. If None, uses config/query.yaml.

    Returns:
        QueryConfig

    Raises:
        ValueError: If YAML is invalid, a keyword entry is not a list of
            strings, or a threshold cannot be coerced to int
    """
    if config_path is None:
        config_path = _default_config_path("query.yaml")

    defaults = QueryConfig()
    yaml_data = _read_yaml(config_path)
    values: dict[str, Any] = {}

    for key, value in yaml_data.items():
        if key in _KEYWORD_FIELDS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Config key {key} in {config_path} must be a list of strings")
            values[key] = tuple(v.lower() for v in value if v.strip())
        elif key in _QUERY_ENV_MAPPING.values():
            try:
                values[key] = _coerce_type(value, int)
            except (ValueError, TypeError) as e:
                raise ValueError(f"Type coercion failed for config {key}={value}: expected int. Error: {e}") from e
        else:
            logger.warning(f"Unknown query config key {key} in {config_path}, ignoring")

    thresholds = {key: values.get(key, getattr(defaults, key)) for key in _QUERY_ENV_MAPPING.values()}
    values.update(_apply_env_overrides(thresholds, _QUERY_ENV_MAPPING))

    return replace(defaults, **values)


@dataclass
class LoggingConfigDefaults:
    """Default values for logging configuration."""

    root_level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    module_levels: dict[str, str] = field(
        default_factory=lambda: {
            "sheet_chat.core": "INFO",
            "sheet_chat.ui": "INFO",
        }
    )
    reduce_noise: dict[str, str] = field(
        default_factory=lambda: {
            "streamlit": "WARNING",
            "openpyxl": "WARNING",
        }
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert dataclass to dictionary."""
        return {
            "root_level": self.root_level,
            "format": self.format,
            "module_levels": self.module_levels.copy(),
            "reduce_noise": self.reduce_noise.copy(),
        }


def load_logging_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load logging config from YAML.

    Returns:
        dict with keys root_level, format, module_levels, reduce_noise

    Raises:
        ValueError: If YAML is invalid
    """
    if config_path is None:
        config_path = _default_config_path("logging.yaml")

    config = LoggingConfigDefaults().to_dict()
    for key, value in _read_yaml(config_path).items():
        if key not in config:
            continue
        if key in ("module_levels", "reduce_noise"):
            # Merge dicts
            if isinstance(value, dict):
                config[key].update(value)
        else:
            config[key] = value
    return config


@dataclass
class UIConfigDefaults:
    """Default values for UI configuration."""

    page_title: str = "Sheet Chat"
    max_upload_size_mb: int = 50
    preview_rows: int = 20
    log_level: str = "INFO"

    def to_dict(self) -> dict[str, Any]:
        """Convert dataclass to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_ui_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load UI config from YAML with env var overrides.

    Precedence: Environment variable → YAML value → Default value

    Raises:
        ValueError: If YAML is invalid
    """
    if config_path is None:
        config_path = _default_config_path("ui.yaml")

    defaults = UIConfigDefaults().to_dict()
    config = defaults.copy()
    for key, value in _read_yaml(config_path).items():
        if key not in defaults:
            continue
        target_type = type(defaults[key])
        try:
            config[key] = _coerce_type(value, target_type)
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to coerce YAML value {key}={value} to {target_type.__name__}: {e}, using default")

    env_mapping = {
        "SHEET_CHAT_PAGE_TITLE": "page_title",
        "MAX_UPLOAD_SIZE_MB": "max_upload_size_mb",
        "PREVIEW_ROWS": "preview_rows",
        "LOG_LEVEL": "log_level",
    }
    return _apply_env_overrides(config, env_mapping)
