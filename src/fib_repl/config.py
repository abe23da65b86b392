"""
Configuration loading for fib-repl.

Settings come from, in increasing priority: built-in defaults, a YAML
file, ``FIB_REPL_*`` environment variables, and finally command-line
flags (applied by the CLI).
"""

import logging
import os
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .fibonacci import NATIVE_BITS

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FIB_REPL_CONFIG"
LOG_FORMATS = ("json", "text")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ENV_OVERRIDES = {
    "bits": "FIB_REPL_BITS",
    "log_level": "FIB_REPL_LOG_LEVEL",
    "log_format": "FIB_REPL_LOG_FORMAT",
}
_ENV_PATTERN = re.compile(r'\$\{([^:}]+)(?::-?([^}]*))?\}')


@dataclass(frozen=True)
class ReplConfig:
    bits: int = NATIVE_BITS
    log_level: str = "WARNING"
    log_format: str = "json"


def _expand_env_vars(value: Any, environ: Mapping[str, str]) -> Any:
    """Expand ``${VAR:-default}`` references inside string values."""
    if isinstance(value, dict):
        return {k: _expand_env_vars(v, environ) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item, environ) for item in value]
    elif isinstance(value, str):
        def replacer(match):
            return environ.get(match.group(1), match.group(2) or '')
        return _ENV_PATTERN.sub(replacer, value)
    return value


def _read_yaml(path: str, environ: Mapping[str, str]) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")
    logger.info({"event": "config_loaded", "path": path})
    return _expand_env_vars(data, environ)


def _coerce_bits(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"bits must be a positive integer, got {value!r}")
    try:
        bits = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"bits must be a positive integer, got {value!r}") from None
    if bits <= 0:
        raise ConfigError(f"bits must be a positive integer, got {value!r}")
    return bits


def validate(values: Dict[str, Any]) -> ReplConfig:
    """Build a :class:`ReplConfig` from raw values, raising ConfigError."""
    config = ReplConfig()
    if "bits" in values:
        config = replace(config, bits=_coerce_bits(values["bits"]))
    if "log_level" in values:
        level = str(values["log_level"]).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {values['log_level']!r}")
        config = replace(config, log_level=level)
    if "log_format" in values:
        fmt = str(values["log_format"]).lower()
        if fmt not in LOG_FORMATS:
            raise ConfigError(f"Unknown log format: {values['log_format']!r}")
        config = replace(config, log_format=fmt)
    return config


def load_config(path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> ReplConfig:
    """
    Load configuration from YAML and the environment.

    Args:
        path: Explicit YAML file. Must exist when given. When omitted,
            ``$FIB_REPL_CONFIG`` is used if set; a missing file there only
            logs a warning.
        environ: Environment mapping, ``os.environ`` by default.

    Raises:
        ConfigError: On unreadable files or invalid values.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    if path is not None:
        if not os.path.isfile(path):
            raise ConfigError(f"Config file not found: {path}")
        values.update(_read_yaml(path, env))
    elif env.get(CONFIG_ENV_VAR):
        default_path = env[CONFIG_ENV_VAR]
        if os.path.isfile(default_path):
            values.update(_read_yaml(default_path, env))
        else:
            logger.warning({"event": "config_missing", "path": default_path})

    for key in list(values):
        if key not in _ENV_OVERRIDES:
            logger.debug({"event": "config_key_ignored", "key": key})
            del values[key]

    for key, var in _ENV_OVERRIDES.items():
        if env.get(var):
            values[key] = env[var]

    return validate(values)


__all__ = ["CONFIG_ENV_VAR", "LOG_FORMATS", "LOG_LEVELS", "ReplConfig", "load_config", "validate"]
