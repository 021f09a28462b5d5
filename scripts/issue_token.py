"""Mint a bearer token for local testing.

Example:
    python scripts/issue_token.py E1 --role employee --wbs-change
"""

from __future__ import annotations

import argparse
import importlib
from datetime import timedelta

from dotenv import load_dotenv

from hr_timekeeping.auth.claims import ClaimsDecoder
from hr_timekeeping.config import get_settings_module
from hr_timekeeping.core.enums import Role


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development JWT.")
    parser.add_argument("employee_id")
    parser.add_argument("--role", choices=[r.value for r in Role], default=Role.EMPLOYEE.value)
    parser.add_argument("--wbs-change", action="store_true", help="grant the work-category change claim")
    parser.add_argument("--hours", type=int, default=8)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    decoder = ClaimsDecoder(settings.JWT_SECRET, getattr(settings, "JWT_ALGORITHM", "HS256"))

    print(
        decoder.issue(
            employee_id=args.employee_id,
            role=Role(args.role),
            can_change_work_category=args.wbs_change,
            ttl=timedelta(hours=args.hours),
        )
    )


if __name__ == "__main__":
    main()
