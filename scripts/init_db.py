"""Apply database/schema.sql to the configured MySQL database."""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from campus_attendance.database.bootstrap import apply_schema, list_tables
from campus_attendance.database.connection import DBConfig
from campus_attendance.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(settings.DB_CONFIG)

    statements = apply_schema(config)
    tables = list_tables(config)
    print(
        f"OK: applied {statements} statements -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
