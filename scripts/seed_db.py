from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from praetor.database.bootstrap import apply_seed_sql, ensure_admin_user
from praetor.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_admin_user(
        db_config,
        name=settings.ADMIN_NAME,
        username=settings.ADMIN_USERNAME,
        password=settings.ADMIN_PASSWORD,
    )

    target = DBConfig.from_dict(db_config)
    print(f"OK: Seeded database -> {target.user}@{target.host}:{target.port}/{target.database}")


if __name__ == "__main__":
    main()
