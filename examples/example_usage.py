"""Example: drive the service layer directly (no Flask).

Controllers are thin; the ledger rules live in the services. Run against a
database prepared with ``python scripts/init_db.py --seed``.
"""

import importlib

from dotenv import load_dotenv

from hr_timekeeping.config import get_settings_module
from hr_timekeeping.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        jwt_secret=settings.JWT_SECRET,
        encryption_key=settings.FIELD_ENCRYPTION_KEY,
        debug=settings.DEBUG,
    )

    print(container.ledger_service.get_latest_sequence("E1").to_dict())
    print(container.chain_auditor.validate("E1", validated_by="example").to_dict())


if __name__ == "__main__":
    main()
