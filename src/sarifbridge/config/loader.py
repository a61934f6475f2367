"""Configuration loading and override resolution."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from sarifbridge.config.models import AppConfig
from sarifbridge.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(".sarifbridge.yaml")

ENV_KEYS: dict[str, tuple[str, str]] = {
    "BITBUCKET_TOKEN": ("credentials", "token"),
    "BITBUCKET_USER": ("credentials", "user"),
    "BITBUCKET_APP_PASSWORD": ("credentials", "app_password"),
    "BITBUCKET_WORKSPACE": ("target", "workspace"),
    "BITBUCKET_REPO_SLUG": ("target", "repo"),
    "BITBUCKET_COMMIT": ("target", "commit"),
    "SARIFBRIDGE_MAX_ANNOTATIONS": ("policy", "max_annotations"),
    "SARIFBRIDGE_API_URL": ("delivery", "api_url"),
}
CLI_KEYS: dict[str, tuple[str, str]] = {
    "token": ("credentials", "token"),
    "user": ("credentials", "user"),
    "password": ("credentials", "app_password"),
    "workspace": ("target", "workspace"),
    "repo": ("target", "repo"),
    "commit": ("target", "commit"),
    "max_annotations": ("policy", "max_annotations"),
    "fail_on_high": ("policy", "fail_on_high"),
    "fail_on_critical": ("policy", "fail_on_critical"),
    "severity_strategy": ("policy", "severity_strategy"),
    "line_strategy": ("policy", "line_strategy"),
    "summary_strategy": ("policy", "summary_strategy"),
}


def _load_yaml(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Config file not found: {path}")
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config file is not valid YAML: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Configuration file must deserialize to a mapping")
    return data


def _set_nested(merged: dict[str, Any], section: str, key: str, value: Any) -> None:
    current = merged.get(section)
    if not isinstance(current, dict):
        current = {}
    else:
        current = dict(current)
    current[key] = value
    merged[section] = current


def apply_overrides(
    raw_config: dict[str, Any],
    env: Mapping[str, str],
    cli_overrides: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Apply precedence: CLI > env > YAML defaults."""
    merged = dict(raw_config)
    for env_name, (section, key) in ENV_KEYS.items():
        value = env.get(env_name)
        if value:
            _set_nested(merged, section, key, value)

    if cli_overrides:
        for option, (section, key) in CLI_KEYS.items():
            value = cli_overrides.get(option)
            # Unset flags arrive as None/False and must not mask lower layers.
            if value is None or value is False:
                continue
            _set_nested(merged, section, key, value)
    return merged


def load_app_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Load and validate central application config.

    An explicit ``config_path`` must exist; the default path is optional since
    every value can also come from the environment or the command line.
    """
    active_env = os.environ if env is None else env
    raw = _load_yaml(config_path or DEFAULT_CONFIG_PATH, required=config_path is not None)
    merged = apply_overrides(raw, active_env, cli_overrides)
    return AppConfig.model_validate(merged)
