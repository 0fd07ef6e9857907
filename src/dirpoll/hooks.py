"""Dynamic hook loading and the default logging hooks."""
from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Optional, Tuple, cast

from .config import HookConfig, HooksConfig
from .monitor import EntryCallback

logger = logging.getLogger(__name__)


class HookError(RuntimeError):
    """Raised when a configured hook cannot be resolved."""


def log_added(name: str) -> None:
    logger.info("Added %s", name)


def log_deleted(name: str) -> None:
    logger.info("Deleted %s", name)


def load_hook(config: HookConfig) -> EntryCallback:
    """Import ``config.module`` and return its ``config.function`` attribute."""

    module = _import_module(config.module)
    try:
        callback = getattr(module, config.function)
    except AttributeError as exc:
        raise HookError(f"Could not find function '{config.function}' in {config.module}") from exc

    if not callable(callback):
        raise HookError(f"Attribute '{config.function}' in {config.module} is not callable")

    return cast(EntryCallback, callback)


def resolve_hooks(config: HooksConfig) -> Tuple[EntryCallback, EntryCallback]:
    """Return the ``(on_add, on_delete)`` pair, using the logging hooks for unset entries."""

    on_add = _resolve(config.on_add, default=log_added)
    on_delete = _resolve(config.on_delete, default=log_deleted)
    return on_add, on_delete


def _resolve(config: Optional[HookConfig], *, default: EntryCallback) -> EntryCallback:
    if config is None:
        return default
    logger.debug("Resolving hook %s.%s", config.module, config.function)
    return load_hook(config)


def _import_module(module_path: str) -> ModuleType:
    try:
        return importlib.import_module(module_path)
    except ImportError as exc:
        raise HookError(f"Unable to import hook module '{module_path}'") from exc
