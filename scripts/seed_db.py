from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.shop_worklog.shop_worklog.container import build_container
from src.shop_worklog.shop_worklog.database.bootstrap import ensure_default_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    container = build_container(db_config=db_config)
    seeded = ensure_default_users(container.users_repo)

    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    if seeded:
        print(f"OK: Seeded default users -> {target}")
    else:
        print(f"SKIP: An admin already exists -> {target}")


if __name__ == "__main__":
    main()
