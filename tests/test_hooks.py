import logging
import os.path

import pytest

from dirpoll.config import HookConfig, HooksConfig
from dirpoll.hooks import HookError, load_hook, log_added, log_deleted, resolve_hooks


def test_load_hook_returns_callable() -> None:
    hook = load_hook(HookConfig(module="os.path", function="basename"))

    assert hook is os.path.basename


def test_load_hook_missing_module() -> None:
    with pytest.raises(HookError, match="Unable to import"):
        load_hook(HookConfig(module="dirpoll.no_such_module", function="run"))


def test_load_hook_missing_function() -> None:
    with pytest.raises(HookError, match="Could not find function 'nope'"):
        load_hook(HookConfig(module="dirpoll.hooks", function="nope"))


def test_load_hook_rejects_non_callable() -> None:
    with pytest.raises(HookError, match="is not callable"):
        load_hook(HookConfig(module="dirpoll.monitor", function="DEFAULT_POLL_INTERVAL"))


def test_resolve_hooks_defaults_to_logging() -> None:
    on_add, on_delete = resolve_hooks(HooksConfig())

    assert on_add is log_added
    assert on_delete is log_deleted


def test_resolve_hooks_mixes_configured_and_default() -> None:
    config = HooksConfig(on_delete=HookConfig(module="os.path", function="basename"))

    on_add, on_delete = resolve_hooks(config)

    assert on_add is log_added
    assert on_delete is os.path.basename


def test_logging_hooks(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="dirpoll.hooks"):
        log_added("new.fits")
        log_deleted("old.fits")

    assert [record.getMessage() for record in caplog.records] == ["Added new.fits", "Deleted old.fits"]


def test_hooks_share_the_monitor_callback_type() -> None:
    from dirpoll import hooks, monitor

    assert hooks.EntryCallback is monitor.EntryCallback
