"""Run one LDAP user sync from the command line (e.g. from cron)."""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from praetor.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), jwt_secret=settings.JWT_SECRET)
    service = container.ldap_service
    stats = service.sync_users(service.load_config())
    print(f"OK: LDAP sync -> synced={stats.synced} created={stats.created} updated={stats.updated}")


if __name__ == "__main__":
    main()
