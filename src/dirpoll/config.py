"""Configuration loading utilities for the directory monitor."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml # type: ignore

from .monitor import DEFAULT_POLL_INTERVAL


logger = logging.getLogger(__name__)

HOOK_NAMES = ("on_add", "on_delete")


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


@dataclass
class MonitorConfig:
    """Options describing which directory to poll and how often."""

    path: Path
    poll_interval: float = DEFAULT_POLL_INTERVAL


@dataclass
class HookConfig:
    """A callback referenced by module and function name."""

    module: str
    function: str


@dataclass
class HooksConfig:
    """Callbacks invoked for added and deleted entries; ``None`` means the default."""

    on_add: Optional[HookConfig] = None
    on_delete: Optional[HookConfig] = None


@dataclass
class AppConfig:
    """Top-level configuration structure."""

    monitor: MonitorConfig
    hooks: HooksConfig = field(default_factory=HooksConfig)


def load_config(path: Path) -> AppConfig:
    """Load and validate the YAML configuration file."""

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML configuration: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    monitor_cfg = _parse_monitor_config(data.get("monitor"), config_path=path)
    hooks_cfg = _parse_hooks_config(data.get("hooks"))

    return AppConfig(monitor=monitor_cfg, hooks=hooks_cfg)


def parse_poll_interval(value: Any, *, field_name: str = "monitor.poll_interval") -> float:
    try:
        interval = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be numeric") from exc
    if not math.isfinite(interval) or interval <= 0:
        raise ConfigError(f"{field_name} must be a positive finite number")
    return interval


def _parse_monitor_config(raw: Any, *, config_path: Path) -> MonitorConfig:
    if not isinstance(raw, dict):
        raise ConfigError("'monitor' section must be a mapping")

    path_raw = raw.get("path")
    if not isinstance(path_raw, str):
        raise ConfigError("monitor.path must be a string")

    watch_path = Path(path_raw)
    if not watch_path.is_absolute():
        watch_path = (config_path.parent / watch_path).resolve()

    poll_interval = parse_poll_interval(raw.get("poll_interval", DEFAULT_POLL_INTERVAL))

    return MonitorConfig(path=watch_path, poll_interval=poll_interval)


def _parse_hooks_config(raw: Any) -> HooksConfig:
    if raw is None:
        return HooksConfig()
    if not isinstance(raw, dict):
        raise ConfigError("'hooks' section must be a mapping")

    unknown = sorted(str(key) for key in raw if key not in HOOK_NAMES)
    if unknown:
        allowed = ", ".join(HOOK_NAMES)
        raise ConfigError(f"Unknown hooks {', '.join(unknown)}; expected one of: {allowed}")

    hooks = HooksConfig()
    for hook_name in HOOK_NAMES:
        item = raw.get(hook_name)
        if item is None:
            continue
        if not isinstance(item, dict):
            raise ConfigError(f"hooks.{hook_name} must be a mapping")

        module = item.get("module")
        function = item.get("function")
        if not isinstance(module, str) or not isinstance(function, str):
            raise ConfigError(f"hooks.{hook_name} must include 'module' and 'function' strings")

        hook_cfg = HookConfig(module=module, function=function)
        logger.info("Loaded hook '%s' (%s.%s)", hook_name, hook_cfg.module, hook_cfg.function)
        setattr(hooks, hook_name, hook_cfg)

    return hooks
