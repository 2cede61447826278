"""Configuration loading and per-invocation option bootstrapping."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.errors import ConfigError, UsageError

CONFIG_ENV_VAR = "RUN_OR_RAISE_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "process_locator": "auto",
    "interactable_types": ["normal", "dialog"],
    "detach": True,
    "log_level": "WARNING",
    "aliases": {},
}


class AppAlias(BaseModel):
    """Default overrides applied when a given command is invoked."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    window_class: str | None = Field(default=None, alias="class")
    process: str | None = None


class RuntimeConfig(BaseModel):
    """Effective configuration after merging defaults with the user file."""

    model_config = ConfigDict(frozen=True)

    process_locator: Literal["auto", "pgrep", "scan"] = "auto"
    interactable_types: frozenset[str] = frozenset({"normal", "dialog"})
    detach: bool = True
    log_level: str = "WARNING"
    aliases: dict[str, AppAlias] = Field(default_factory=dict)


class InvocationOptions(BaseModel):
    """Everything one invocation was asked to do, fixed before matching starts."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1)
    extra_args: tuple[str, ...] = ()
    list_mode: bool = False
    force: bool = False
    passthrough: bool = False
    reverse: bool = False
    detach: bool = True
    class_name: str | None = None
    process_name: str | None = None

    @property
    def identifier(self) -> str:
        """Name used to look up processes."""
        return self.process_name or Path(self.command).name

    @property
    def needs_passthrough(self) -> bool:
        return self.passthrough and bool(self.extra_args)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_path(environ: dict[str, str] | None = None) -> Path:
    """Resolve the config file location from the environment."""
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    xdg_home = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(xdg_home).expanduser() / "run-or-raise" / "config.yaml"


def load_effective_config(path: Path | None = None) -> RuntimeConfig:
    """Load the user config file merged over the built-in defaults."""
    config_path = path or default_config_path()
    merged = merge_dicts(DEFAULT_CONFIG, load_yaml(config_path))
    try:
        return RuntimeConfig.model_validate(merged)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ConfigError(f"Invalid config {config_path}: {location}: {first['msg']}") from exc


def build_options(
    config: RuntimeConfig,
    *,
    command: str,
    extra_args: list[str] | tuple[str, ...] = (),
    list_mode: bool = False,
    force: bool = False,
    passthrough: bool = False,
    reverse: bool = False,
    no_fork: bool = False,
    class_name: str | None = None,
    process_name: str | None = None,
) -> InvocationOptions:
    """Combine CLI flags with config defaults; explicit flags always win."""
    if not Path(command.strip()).name:
        raise UsageError(f"not a runnable command: '{command}'")
    class_name = (class_name or "").strip() or None
    process_name = (process_name or "").strip() or None
    alias = config.aliases.get(command) or config.aliases.get(Path(command).name)
    if alias is not None:
        class_name = class_name or alias.window_class
        process_name = process_name or alias.process
    try:
        return InvocationOptions(
            command=command,
            extra_args=tuple(extra_args),
            list_mode=list_mode,
            force=force or passthrough,
            passthrough=passthrough,
            reverse=reverse,
            detach=config.detach and not no_fork,
            class_name=class_name,
            process_name=process_name,
        )
    except ValidationError as exc:
        raise UsageError(f"invalid invocation: {exc.errors()[0]['msg']}") from exc
