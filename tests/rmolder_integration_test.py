from __future__ import annotations

import os
import time
from pathlib import Path

from rm_older.rmolder import RmOlder
from rm_older.rmolderconfig import RmOlderConfig
from rm_older.rmolderconfig import load_config

CONFIG_FILE = "tests/test_config.ini"


def test_integration_with_config_file(tmp_path: Path) -> None:
    now = time.time()
    for name, age in [("old.log", 7200), ("new.log", 60), (".hidden", 7200)]:
        filepath = tmp_path / name
        filepath.write_text(name)
        os.utime(filepath, (now - age, now - age))
    (tmp_path / "archive").mkdir()

    file_config = load_config(CONFIG_FILE)
    config = RmOlderConfig(
        directory=str(tmp_path),
        age=file_config.age,
        exclude_file_pattern=file_config.exclude_file_pattern,
    )
    rmolder = RmOlder(config)

    dry_result = rmolder.dry_run()
    result = rmolder.run()

    assert tuple(dry_result) == (1, 2)
    assert tuple(result) == (1, 2)
    assert sorted(os.listdir(tmp_path)) == [".hidden", "archive", "new.log"]
