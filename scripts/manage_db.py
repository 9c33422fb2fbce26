"""Database helper: `python scripts/manage_db.py init|seed|tables`."""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.q361_portal.q361_portal.core.logging import get_logger, setup_logging
from src.q361_portal.q361_portal.database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

logger = get_logger("q361_portal.scripts.manage_db")


def _target(db_config: dict) -> str:
    return f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=["init", "seed", "tables"])
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    if args.command == "init":
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Applied schema.sql -> %s (tables=%d)", _target(db_config), len(list_tables(db_config)))
    elif args.command == "seed":
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("Seeded database -> %s", _target(db_config))
    else:
        for name in list_tables(db_config):
            print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
