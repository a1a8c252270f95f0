"""
Configuration loading and merging for Ore Monitor.

The effective configuration is built from three layers, each deep-merged
over the previous one:

1. **Built-in defaults** (DEFAULT_CONFIG)
   - Public Ore instance, anonymous session, 30 second timeout.

2. **Config file**
   - ``--config PATH`` when given (must exist),
   - else ``./ore-monitor.yaml`` if present,
   - else ``~/.config/ore-monitor/config.yaml`` if present.

3. **Environment**
   - ``ORE_API_KEY`` and ``ORE_API_URL``, after loading a ``.env`` file
     with python-dotenv.

Merge Behavior
--------------
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

String values written as ``${VAR}`` are replaced with the value of the
environment variable VAR (empty when unset).

Examples
--------
    >>> from oremonitor.config import load_effective_config
    >>> cfg = load_effective_config()
    >>> cfg["ore"]["api_url"]
    'https://ore.spongepowered.org/api/v2'
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
import re
from typing import Any

from dotenv import load_dotenv
import yaml

from oremonitor.exceptions import ConfigError
from oremonitor.logging import get_global_logger

DEFAULT_CONFIG: dict[str, Any] = {
    "ore": {
        "api_url": "https://ore.spongepowered.org/api/v2",
        "site_url": "https://ore.spongepowered.org",
        "api_key": None,
        "timeout": 30,
        "user_agent": "Ore-Monitor",
    },
    "check": {
        "platform_id": "spongeapi",
    },
    "install": {
        "directory": ".",
    },
}

LOCAL_CONFIG_NAME = "ore-monitor.yaml"
USER_CONFIG_PATH = Path("~/.config/ore-monitor/config.yaml")

_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "ORE_API_KEY": ("ore", "api_key"),
    "ORE_API_URL": ("ore", "api_url"),
}

_ENV_REF = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML config file and return its top-level mapping.

    An empty file counts as an empty mapping.

    Raises:
      ConfigError - missing file, invalid YAML, or a non-mapping document
    """
    if not p.exists():
        raise ConfigError(f"config file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"Cannot read config file {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _expand_env_refs(value: Any) -> Any:
    """Replace ``${VAR}`` strings anywhere in value with the environment value."""
    if isinstance(value, dict):
        return {k: _expand_env_refs(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_refs(v) for v in value]
    if isinstance(value, str):
        match = _ENV_REF.match(value.strip())
        if match:
            env_var = match.group(1)
            resolved = os.environ.get(env_var)
            if not resolved:
                get_global_logger().verbose(
                    "CONFIG", f"Warning: Environment variable {env_var} not set"
                )
            return resolved or ""
    return value


# -------------------------------
# Layer discovery
# -------------------------------


def _find_config_file(config_path: Path | None, cwd: Path) -> Path | None:
    """Pick the config file layer; an explicit path must exist."""
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"config file not found: {config_path}")
        return config_path
    for candidate in (cwd / LOCAL_CONFIG_NAME, USER_CONFIG_PATH.expanduser()):
        if candidate.is_file():
            return candidate
    return None


def _env_overlay() -> dict[str, Any]:
    overlay: dict[str, Any] = {}
    for env_var, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            overlay.setdefault(section, {})[key] = value
    return overlay


def _validate(cfg: dict[str, Any]) -> None:
    for section in ("ore", "check", "install"):
        if not isinstance(cfg.get(section), dict):
            raise ConfigError(f"config section {section!r} must be a mapping")

    timeout = cfg["ore"].get("timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"ore.timeout must be a positive number, got {timeout!r}")

    for key in ("api_url", "site_url", "user_agent"):
        value = cfg["ore"].get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"ore.{key} must be a non-empty string")

    platform_id = cfg["check"].get("platform_id")
    if not isinstance(platform_id, str) or not platform_id.strip():
        raise ConfigError("check.platform_id must be a non-empty string")


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(
    config_path: Path | None = None,
    *,
    cwd: Path | None = None,
    use_dotenv: bool = True,
) -> dict[str, Any]:
    """
    Load and merge the effective configuration.

    Steps
      1) Start from DEFAULT_CONFIG.
      2) Merge the config file layer, if one is found.
      3) Load ``.env`` (unless use_dotenv is False) and merge environment
         overrides.
      4) Expand ``${VAR}`` references and validate.

    Returns
      A merged configuration dict with ``ore``, ``check`` and ``install``
      sections.

    Raises
      ConfigError on a missing explicit config file, invalid YAML, a
      non-mapping document, or invalid values.
    """
    logger = get_global_logger()
    cwd = cwd or Path.cwd()

    merged = copy.deepcopy(DEFAULT_CONFIG)
    layers_merged = 1

    config_file = _find_config_file(config_path, cwd)
    if config_file is not None:
        logger.verbose("CONFIG", f"Loading: {config_file}")
        merged = _deep_merge_dicts(merged, _load_yaml_file(config_file))
        layers_merged += 1

    if use_dotenv:
        load_dotenv()
    env_overlay = _env_overlay()
    if env_overlay:
        logger.verbose(
            "CONFIG",
            f"Environment overrides: {', '.join(sorted(env_overlay.get('ore', {})))}",
        )
        merged = _deep_merge_dicts(merged, env_overlay)
        layers_merged += 1

    merged = _expand_env_refs(merged)
    logger.verbose("CONFIG", f"Deep merged {layers_merged} layer(s)")
    _validate(merged)

    if not merged["ore"].get("api_key"):
        merged["ore"]["api_key"] = None
    logger.debug("CONFIG", f"API URL: {merged['ore']['api_url']}")
    return merged
