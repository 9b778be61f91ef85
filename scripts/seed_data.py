"""Write a demo timetable into the configured data directory."""

from __future__ import annotations

import importlib
import random

from timetable_tracker.config import get_settings_module
from timetable_tracker.state.store import AppStateStore
from timetable_tracker.storage.json_file_store import JsonFileBlobStore
from timetable_tracker.timetable.extraction import MockTimetableExtractor


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    data_dir = getattr(settings, "DATA_DIR", None)
    if not data_dir:
        raise SystemExit("DATA_DIR is not set for this environment; nothing to seed.")

    store = AppStateStore(JsonFileBlobStore(data_dir))
    timetable = MockTimetableExtractor(rng=random.Random(42)).extract(b"seed")
    store.set_timetable(timetable)

    classes = sum(len(d.classes) for d in timetable.schedule)
    print(f"OK: Seeded timetable {timetable.id} ({classes} weekly classes) -> {data_dir}")


if __name__ == "__main__":
    main()
