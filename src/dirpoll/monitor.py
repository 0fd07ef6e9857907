"""Directory monitoring loop with a simple polling backend."""
from __future__ import annotations

import logging
import math
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, List, Union

from .events import ChangeKind, ChangeRecord

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0

# Entry name -> "seen during the current pass"; every marker is False between passes.
Snapshot = Dict[str, bool]
EntryCallback = Callable[[str], None]
PathArg = Union[str, os.PathLike]


@dataclass
class MonitorStats:
    """Counters emitted by the monitor for observability."""

    cycles: int = 0
    events_emitted: int = 0


class DirectoryMonitor:
    """Polls a single directory and reports entries that appear or disappear.

    The monitor only tracks entry names: files, subdirectories and links are
    treated alike and their contents are never inspected. Callbacks are
    invoked synchronously on the thread running :meth:`watch`.
    """

    def __init__(self, poll_interval: float = DEFAULT_POLL_INTERVAL):
        if not math.isfinite(poll_interval) or poll_interval <= 0:
            raise ValueError("poll_interval must be a positive finite number")
        self._poll_interval = float(poll_interval)
        self._stop_event = threading.Event()
        self._snapshot: Snapshot = {}
        self._stats = MonitorStats()
        self._watching = False

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    @property
    def snapshot(self) -> FrozenSet[str]:
        """Names tracked after the most recent scan."""

        return frozenset(self._snapshot)

    @property
    def stats(self) -> MonitorStats:
        return self._stats

    @property
    def is_watching(self) -> bool:
        return self._watching

    def watch(self, path: PathArg, on_add: EntryCallback, on_delete: EntryCallback) -> None:
        """Watch ``path`` until stopped or until the directory can no longer be read.

        Entries already present are reported through ``on_add`` before the
        first sleep. Any ``OSError`` raised while listing the directory
        propagates to the caller and ends the loop.
        """

        root = Path(path)
        self._stop_event.clear()
        self._stats = MonitorStats()
        self._snapshot = {}

        self._snapshot = {name: False for name in _list_entries(root)}
        initial = [ChangeRecord(name, ChangeKind.ADDED) for name in self._snapshot]

        logger.info("Starting monitor for %s (%s entries)", root, len(initial))
        self._watching = True
        try:
            self._dispatch(initial, on_add, on_delete)
            while not self._stop_event.is_set():
                if self._stop_event.wait(self._poll_interval):
                    break
                changes = diff_snapshot(self._snapshot, _list_entries(root))
                self._stats.cycles += 1
                if changes:
                    self._dispatch(changes, on_add, on_delete)
        finally:
            self._watching = False
            logger.info(
                "Monitor stopped after %s cycles, %s events",
                self._stats.cycles,
                self._stats.events_emitted,
            )

    def stop(self) -> None:
        """Signal the monitor to stop before its next sleep."""

        self._stop_event.set()

    def _dispatch(self, changes: Iterable[ChangeRecord], on_add: EntryCallback, on_delete: EntryCallback) -> None:
        for change in changes:
            logger.debug("Entry %s: %s", change.kind.value, change.name)
            if change.kind is ChangeKind.DELETED:
                on_delete(change.name)
            else:
                on_add(change.name)
            self._stats.events_emitted += 1


def diff_snapshot(snapshot: Snapshot, listing: Iterable[str]) -> List[ChangeRecord]:
    """Update ``snapshot`` in place from a fresh listing and return the changes.

    Additions come first in listing order, followed by deletions in snapshot
    order.
    """

    changes: List[ChangeRecord] = []

    for name in listing:
        if name not in snapshot:
            changes.append(ChangeRecord(name, ChangeKind.ADDED))
        snapshot[name] = True

    for name in [name for name, seen in snapshot.items() if not seen]:
        del snapshot[name]
        changes.append(ChangeRecord(name, ChangeKind.DELETED))

    for name in snapshot:
        snapshot[name] = False

    return changes


def _list_entries(root: Path) -> List[str]:
    try:
        return [child.name for child in root.iterdir()]
    except OSError:
        logger.debug("Unable to list directory %s", root)
        raise
