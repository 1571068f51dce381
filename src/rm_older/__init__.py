from __future__ import annotations

from .rmolder import RmOlder
from .rmolder import is_too_old
from .rmolderconfig import RmOlderConfig
from .rmoldermodel import DeleteOutcome
from .rmoldermodel import Entry
from .rmoldermodel import RunResult

__all__ = [
    "DeleteOutcome",
    "Entry",
    "RmOlder",
    "RmOlderConfig",
    "RunResult",
    "is_too_old",
]
