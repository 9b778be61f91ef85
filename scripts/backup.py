"""Back up the stored JSON blobs into backups/<timestamp>/."""

from __future__ import annotations

import importlib
import shutil
from datetime import datetime
from pathlib import Path

from timetable_tracker.config import get_settings_module
from timetable_tracker.core.constants import STATE_KEYS


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    data_dir = getattr(settings, "DATA_DIR", None)
    if not data_dir or not Path(data_dir).is_dir():
        raise SystemExit(f"No data directory to back up: {data_dir!r}")

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = Path(__file__).resolve().parents[1] / "backups" / ts
    out_dir.mkdir(parents=True, exist_ok=True)

    copied = 0
    for key in STATE_KEYS:
        src = Path(data_dir) / f"{key}.json"
        if src.exists():
            shutil.copy2(src, out_dir / src.name)
            copied += 1

    print(f"OK: Backup created: {out_dir} ({copied} file(s))")


if __name__ == "__main__":
    main()
