from __future__ import annotations

import dataclasses
import logging
import os
import re
from configparser import ConfigParser

NEW_CONFIG = """\
[rmolder]
# Directory to clean. Only the files directly inside it are considered.
directory = {directory}

# Files not modified for more than this many seconds are removed.
age = 86400

# Report the files that would be removed without removing them.
dry = true

# Files matching these regular expressions are never examined.
# The patterns are matched against the file name only.
# Multiline values are combined into a single regular expression.
exclude_files = ^\\..*$

"""


def parse_age(value: str) -> int:
    """
    Convert a command line or config value into an age in seconds.

    Raises:
        ValueError: When the value is not a non-negative integer.
    """
    try:
        age = int(value.strip())
    except ValueError:
        raise ValueError(
            f"Age must be a whole number of seconds, got '{value}'"
        ) from None

    if age < 0:
        raise ValueError(f"Age cannot be negative, got {age}")

    return age


@dataclasses.dataclass(frozen=True)
class RmOlderConfig:
    """The validated values a single run of RmOlder works with."""

    directory: str
    age: int
    dry: bool = False
    exclude_file_pattern: str | None = None

    def __post_init__(self) -> None:
        if self.age < 0:
            raise ValueError(f"Age cannot be negative, got {self.age}")

        if self.exclude_file_pattern:
            try:
                re.compile(self.exclude_file_pattern)
            except re.error as error:
                raise ValueError(
                    f"Invalid exclude pattern '{self.exclude_file_pattern}': {error}"
                ) from None


class RmOlderFileConfig:
    """Defaults for the command line loaded from an ini file."""

    logger = logging.getLogger(__name__)

    def __init__(self, filepath: str) -> None:
        """Load the configuration from the given file."""
        self._config = ConfigParser()
        success = self._config.read(filepath)

        if not success:
            raise ValueError(f"Could not read config file at {filepath}")

        self.logger.debug("Loaded config from %s", filepath)

    @property
    def directory(self) -> str:
        """Return the directory to clean, defaults to the working directory."""
        return self._config.get("rmolder", "directory", fallback=".")

    @property
    def age(self) -> int | None:
        """Return the age threshold in seconds, or None if not set."""
        value = self._config.get("rmolder", "age", fallback="")
        return parse_age(value) if value.strip() else None

    @property
    def dry(self) -> bool:
        """Return whether to only report the files to remove."""
        return self._config.getboolean("rmolder", "dry", fallback=False)

    @property
    def exclude_file_pattern(self) -> str | None:
        """Return the pattern of file names to skip."""
        config_line = self._config.get("rmolder", "exclude_files", fallback="")
        lines = [line.strip() for line in config_line.splitlines() if line.strip()]
        return "|".join(lines) or None


def load_config(filepath: str) -> RmOlderFileConfig:
    """
    Load an ini file of command line defaults.

    Raises:
        ValueError: When the file cannot be read.
    """
    return RmOlderFileConfig(filepath)


def write_new_config(filename: str) -> None:
    """Write a new config file if one does not exist."""
    if os.path.exists(filename):
        return

    config = NEW_CONFIG.format(directory=os.getcwd())

    with open(filename, "w") as config_file:
        config_file.write(config)
