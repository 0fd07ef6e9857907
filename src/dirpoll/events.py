"""Change records produced by the directory monitor."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChangeKind(str, Enum):
    """Kinds of changes the monitor can detect."""

    ADDED = "added"
    DELETED = "deleted"


@dataclass(frozen=True)
class ChangeRecord:
    """A single entry that appeared in or disappeared from the watched directory."""

    name: str
    kind: ChangeKind
