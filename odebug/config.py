"""Configuration module — frozen dataclass loaded from YAML and environment variables."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "ODEBUG_"
CONFIG_ENV_VAR = "ODEBUG_CONFIG"


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    use_workspace_root: bool = True
    output_to_build_dir: bool = True
    always_log: bool = False
    target_dir: str | None = None
    default_file: str = "debug.log"
    file_extension: str = ".log"
    fsync_writes: bool = False


_BOOL_FIELDS = {f.name for f in fields(Config) if f.type in (bool, "bool")}


def load_yaml_config(path: str | None) -> dict:
    """Load overrides from a YAML file. Returns empty dict if no path or unreadable."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        logger.warning("Invalid YAML in %s (%s), using defaults", path, e)
        return {}
    except OSError as e:
        logger.warning("Cannot read config file %s (%s), using defaults", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, an optional YAML file, then environment variables."""
    values = {}
    yaml_data = load_yaml_config(path or os.environ.get(CONFIG_ENV_VAR))
    for f in fields(Config):
        if yaml_data.get(f.name) is not None:
            values[f.name] = yaml_data[f.name]
        env_value = os.environ.get(ENV_PREFIX + f.name.upper())
        if env_value is not None:
            values[f.name] = env_value

    for name, value in values.items():
        if name in _BOOL_FIELDS:
            values[name] = _parse_bool(value)
        elif value is not None:
            values[name] = str(value)

    # An empty ODEBUG_TARGET_DIR means "not set"
    if not values.get("target_dir"):
        values["target_dir"] = None

    return Config(**values)
