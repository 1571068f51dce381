from __future__ import annotations

import logging
import os
import re
import time
from collections.abc import Callable

from .rmolderconfig import RmOlderConfig
from .rmoldermodel import DeleteOutcome
from .rmoldermodel import Entry
from .rmoldermodel import RunResult


def is_too_old(entry: Entry, now: int, threshold: int) -> bool:
    """True if the entry is strictly older than `threshold` seconds at `now`."""
    return entry.age_seconds(now) > threshold


class RmOlder:
    """Remove the files of a directory that have not been modified for too long."""

    logger = logging.getLogger(__name__)

    def __init__(self, config: RmOlderConfig) -> None:
        """
        Initialize a new RmOlder.

        Args:
            config: The directory, age threshold and mode to work with.
        """
        self._config = config

    def execute(self) -> RunResult:
        """Run in the mode selected by the configuration."""
        if self._config.dry:
            return self.dry_run()

        return self.run()

    def run(self) -> RunResult:
        """
        Delete the files older than the configured age.

        Failing to delete a file never stops the run, it only keeps the
        file out of the deleted count.

        Returns:
            The number of files deleted and the number of files examined.
        """
        old_entries, total = self.classify()

        outcomes = [self._delete_entry(entry) for entry in old_entries]
        deleted = outcomes.count(DeleteOutcome.DELETED)

        self.logger.info("Deleted %s of %s old files", deleted, len(old_entries))

        return RunResult(deleted=deleted, total=total)

    def dry_run(self) -> RunResult:
        """
        Print the files older than the configured age without deleting them.

        Returns:
            The number of files eligible for deletion and the number of files examined.
        """
        old_entries, total = self.classify()

        for entry in old_entries:
            print(f"File to delete: {entry.path}")

        return RunResult(deleted=len(old_entries), total=total)

    def classify(self) -> tuple[list[Entry], int]:
        """
        Split the directory into files that are too old and files to keep.

        Returns:
            A tuple of the old entries and the count of all entries examined.
        """
        now = int(time.time())
        threshold = self._config.age

        entries = self.list_entries()
        old_entries = [entry for entry in entries if is_too_old(entry, now, threshold)]

        self.logger.debug(
            "%s of %s files are older than %s seconds",
            len(old_entries),
            len(entries),
            threshold,
        )

        return old_entries, len(entries)

    def find(self, predicate: Callable[[Entry], bool]) -> list[Entry]:
        """Return the entries of the directory that match the given predicate."""
        return [entry for entry in self.list_entries() if predicate(entry)]

    def list_entries(self) -> list[Entry]:
        """
        List the files directly inside the directory.

        A directory that is missing or cannot be read has no entries.
        """
        directory = self._config.directory
        entries: list[Entry] = []

        try:
            with os.scandir(directory) as scanner:
                for dir_entry in scanner:
                    entry = self._build_entry(dir_entry)
                    if entry is not None:
                        entries.append(entry)

        except OSError as error:
            self.logger.warning("Unable to list '%s': %s", directory, error)
            return []

        self.logger.debug("Found %s files in '%s'", len(entries), directory)

        return entries

    def _build_entry(self, dir_entry: os.DirEntry[str]) -> Entry | None:
        """Snapshot a directory entry, None if it should not be examined."""
        if self._is_ignored_filename(dir_entry.name):
            self.logger.debug("Ignoring file `%s`", dir_entry.name)
            return None

        try:
            if dir_entry.is_dir(follow_symlinks=False):
                return None

            modified = int(dir_entry.stat(follow_symlinks=False).st_mtime)

        except FileNotFoundError:
            # The file has been removed after the listing
            self.logger.debug("'%s' removed during listing.", dir_entry.path)
            return None

        except OSError as error:
            self.logger.debug("Unable to stat '%s': %s", dir_entry.path, error)
            return None

        return Entry(path=dir_entry.path, modified=modified)

    def _is_ignored_filename(self, filename: str) -> bool:
        """True if the filename is in the excluded pattern."""
        ptn = self._config.exclude_file_pattern
        if ptn and re.search(ptn, filename):
            return True

        return False

    def _delete_entry(self, entry: Entry) -> DeleteOutcome:
        """Attempt to remove a single file. Failures are reported, not raised."""
        try:
            os.unlink(entry.path)

        except FileNotFoundError:
            self.logger.debug("'%s' was already removed.", entry.path)
            return DeleteOutcome.MISSING

        except OSError as error:
            self.logger.debug("Unable to remove '%s': %s", entry.path, error)
            return DeleteOutcome.FAILED

        self.logger.debug("Removed %s", entry)
        return DeleteOutcome.DELETED
