from __future__ import annotations

import argparse
import logging
import os
import random
import shutil
import time
from pathlib import Path
from string import ascii_lowercase

from rm_older import __main__

BASE_DIR: Path = Path(__file__).resolve().parent
TEST_DIR: Path = BASE_DIR / "smoketest_files"
FILE_COUNT_RANGE: tuple[int, int] = (1, 100)
MAX_AGE_SECONDS = 7200
AGE_THRESHOLD = 3600

logger = logging.getLogger(__name__)


def build_smoketest_files(file_count: int) -> int:
    """Create files with random ages. Returns the count older than the threshold."""
    TEST_DIR.mkdir(parents=True, exist_ok=True)
    now = time.time()
    old_count = 0

    for _ in range(file_count):
        filename = "".join(random.choices(ascii_lowercase, k=12))
        filepath = TEST_DIR / f"{filename}.txt"
        age = random.randint(0, MAX_AGE_SECONDS)

        filepath.write_text(filename)
        os.utime(filepath, (now - age, now - age))

        if age > AGE_THRESHOLD:
            old_count += 1

    logger.info(
        "Created %d files, %d older than %ds", file_count, old_count, AGE_THRESHOLD
    )

    return old_count


def main() -> int:
    """Run rm-older against a generated directory, dry first."""
    parser = argparse.ArgumentParser(description="Smoketest rm-older.")
    parser.add_argument("--keep", action="store_true", help="Keep the files after.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    shutil.rmtree(TEST_DIR, ignore_errors=True)
    expected = build_smoketest_files(random.randint(*FILE_COUNT_RANGE))
    cli_args = ["--age", str(AGE_THRESHOLD), "--directory", str(TEST_DIR)]

    try:
        __main__.main(cli_args=[*cli_args, "--dry"])
        __main__.main(cli_args=cli_args)

        remaining = len(os.listdir(TEST_DIR))
        logger.info("Expected %d removed, %d files remain", expected, remaining)

    finally:
        if not args.keep:
            shutil.rmtree(TEST_DIR, ignore_errors=True)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
