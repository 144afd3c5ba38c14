"""Backup participants, attendance and periods to a JSON file.

Works for every STORAGE_BACKEND; the output can be loaded back by pointing
STORAGE_PATH at it with STORAGE_BACKEND=json.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.absensi_pdm.absensi_pdm.core.constants import (
    STORAGE_KEY_ATTENDANCE,
    STORAGE_KEY_PARTICIPANTS,
    STORAGE_KEY_PERIODS,
)
from src.absensi_pdm.absensi_pdm.database.bootstrap import build_store


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(settings)

    snapshot: dict[str, str] = {}
    for key in (STORAGE_KEY_PARTICIPANTS, STORAGE_KEY_ATTENDANCE, STORAGE_KEY_PERIODS):
        value = store.get(key)
        if value is not None:
            snapshot[key] = value

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"absensi_pdm_{ts}.json"
    out_file.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file} ({len(snapshot)} keys)")


if __name__ == "__main__":
    main()
