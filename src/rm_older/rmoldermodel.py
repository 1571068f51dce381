from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from datetime import datetime
from enum import Enum


@dataclasses.dataclass(frozen=True)
class Entry:
    """A file found directly inside the target directory."""

    path: str
    modified: int

    def age_seconds(self, now: int) -> int:
        """Return the age of the entry relative to `now`."""
        return now - self.modified

    def __str__(self) -> str:
        modified = datetime.fromtimestamp(self.modified).strftime("%Y-%m-%d %H:%M:%S")
        return f"{self.path} (modified {modified})"


@dataclasses.dataclass(frozen=True)
class RunResult:
    """Counts from a single pass. `deleted` is the eligible count on a dry run."""

    deleted: int
    total: int

    def __iter__(self) -> Iterator[int]:
        return iter((self.deleted, self.total))

    def __str__(self) -> str:
        return f"Files deleted : {self.deleted}/{self.total}"


class DeleteOutcome(Enum):
    DELETED = 1
    MISSING = 2
    FAILED = 3
