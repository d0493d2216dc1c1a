# backend/propertyhub/cli/__main__.py
from __future__ import annotations

import argparse

from propertyhub.cli.seed_demo import seed_demo
from propertyhub.db import create_schema
from propertyhub.models import UserRole


def main() -> None:
    p = argparse.ArgumentParser(prog="propertyhub", description="Seed a local PropertyHub database")
    p.add_argument("--user-id", default="demo-agent")
    p.add_argument("--user-email", default="agent@demo.local")
    p.add_argument("--role", default="agent", choices=[r.value for r in UserRole])
    p.add_argument("--months", type=int, default=6)
    p.add_argument("--no-sample-properties", action="store_true")
    p.add_argument("--create-tables", action="store_true", help="create tables directly instead of via alembic")
    args = p.parse_args()

    if args.create_tables:
        create_schema()

    out = seed_demo(
        user_id=args.user_id,
        user_email=args.user_email,
        role=args.role,
        months=args.months,
        create_sample_properties=(not args.no_sample_properties),
    )
    print(
        {
            "ok": True,
            "user_id": out.user_id,
            "properties_created": out.properties_created,
            "analytics_created": out.analytics_created,
            "tutorials_created": out.tutorials_created,
        }
    )


if __name__ == "__main__":
    main()
