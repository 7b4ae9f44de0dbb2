from __future__ import annotations

import importlib

from dotenv import load_dotenv

from hajj_guide.config import get_settings_module
from hajj_guide.database.bootstrap import apply_seed_sql, ensure_demo_admin


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    # Seeded accommodations and schedules reference admin 1.
    ensure_demo_admin(db_config)
    apply_seed_sql(db_config)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
