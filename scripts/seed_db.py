from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from attendance_tracker.common.datetime_utils import now_local
from attendance_tracker.container import build_container
from attendance_tracker.database.seed import seed_demo_data


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(storage_backend="mysql", db_config=dict(settings.DB_CONFIG))

    seeded = seed_demo_data(container.user_service, container.attendance_service, today=now_local().date())
    cfg = container.conn.config
    state = "Seeded" if seeded else "Already seeded"
    print(f"OK: {state} database -> {cfg.user}@{cfg.host}:{cfg.port}/{cfg.database}")


if __name__ == "__main__":
    main()
