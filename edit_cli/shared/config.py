"""Configuration loading utilities for the edit-data service."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError

OUTPUT_FORMATS = ("table", "json")


@dataclass(frozen=True, slots=True)
class SessionSettings:
    """Where session snapshots are read from."""

    snapshot_path: Path


@dataclass(frozen=True, slots=True)
class OutputSettings:
    """Rendering defaults for CLI output."""

    default_format: str  # "table" or "json"


@dataclass(frozen=True, slots=True)
class ErrorSettings:
    """Wire representation of request validation failures."""

    # When set, SessionNotFound and SessionNotInitialized share one code/message.
    collapse_session_errors: bool


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    sessions: SessionSettings
    output: OutputSettings
    errors: ErrorSettings

    def with_sessions_path(self, new_path: str | Path) -> AppConfig:
        """Return a copy with an updated session snapshot path."""
        resolved = paths.resolve_path(new_path)
        new_sessions = replace(self.sessions, snapshot_path=resolved)
        return replace(self, sessions=new_sessions)


def _default_config(env: Mapping[str, str]) -> dict[str, Any]:
    return {
        "sessions": {"snapshot_path": str(paths.default_sessions_path(env=env))},
        "output": {"default_format": "table"},
        "errors": {"collapse_session_errors": False},
    }


ENV_OVERRIDE_SPEC: dict[str, tuple[str, type]] = {
    "sessions.snapshot_path": (paths.SESSIONS_PATH_ENV, str),
    "output.default_format": ("EDITDATA_OUTPUT_FORMAT", str),
    "errors.collapse_session_errors": ("EDITDATA_COLLAPSE_SESSION_ERRORS", bool),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(env or os.environ)
    resolved_config_path = _resolve_config_path(config_path, env)
    file_data = _load_yaml(resolved_config_path)
    defaults = _default_config(env)
    merged: dict[str, Any] = _deep_merge(defaults, file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(
    config_path: str | Path | None, env: Mapping[str, str]
) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file at {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})
    for dotted_key, (env_key, expected_type) in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        raw_value = env[env_key]
        try:
            value = _coerce_env_value(raw_value, expected_type)
        except ValueError as exc:
            raise ConfigurationError(
                f"Environment override {env_key} has invalid value '{raw_value}': {exc}"
            ) from exc
        _assign_nested(config_copy, dotted_key.split("."), value)
    return config_copy


def _coerce_env_value(raw: str, expected_type: type) -> Any:
    cleaned = raw.strip()
    if expected_type is bool:
        lowered = cleaned.lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        raise ValueError("expected boolean (true/false)")
    return cleaned


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _coerce_env_value(value, bool)
    raise ValueError(f"expected boolean (true/false), got {value!r}")


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        sessions = SessionSettings(
            snapshot_path=paths.resolve_path(data["sessions"]["snapshot_path"]),
        )
        output_format = str(data["output"]["default_format"]).lower()
        errors = ErrorSettings(
            collapse_session_errors=_coerce_flag(data["errors"]["collapse_session_errors"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Unsupported output.default_format '{output_format}'; expected one of {', '.join(OUTPUT_FORMATS)}."
        )

    return AppConfig(
        source_path=source_path,
        sessions=sessions,
        output=OutputSettings(default_format=output_format),
        errors=errors,
    )
