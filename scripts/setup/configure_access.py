# scripts/setup/configure_access.py
"""
Create the fleet database roles and their login users (PostgreSQL only).
Must run as a superuser or a role with CREATEROLE.

Usage:
    python scripts/setup/configure_access.py              # create roles + users, list them
    python scripts/setup/configure_access.py --dry-run    # print the SQL only
    python scripts/setup/configure_access.py --verify     # also log in as each user and check grants
"""

import sys
import os
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError, ProgrammingError
from app.config import settings
from app.database import engine
from app.services.access_control import (
    ROLES, build_role_statements, build_user_statements, get_role, is_duplicate_object, verify_role,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


def apply_statements(statements):
    """Run each statement in its own transaction; existing roles are skipped."""
    for sql in statements:
        shown = sql.split(" PASSWORD ")[0]
        try:
            with engine.begin() as conn:
                conn.execute(text(sql))
            logger.info(f"OK: {shown}")
        except ProgrammingError as e:
            if is_duplicate_object(e):
                logger.info(f"Already exists, skipping: {shown}")
            else:
                raise


def list_roles():
    names = [r.name for r in ROLES] + list(settings.DB_USERS)
    with engine.connect() as conn:
        rows = conn.execute(text(
            "SELECT r.rolname, r.rolcanlogin, "
            "       ARRAY(SELECT g.rolname FROM pg_auth_members m JOIN pg_roles g ON g.oid = m.roleid "
            "             WHERE m.member = r.oid) AS member_of "
            "FROM pg_roles r WHERE r.rolname = ANY(:names) ORDER BY r.rolname"
        ), {"names": names}).fetchall()
    print("\n=== Current Users and Roles ===")
    for name, can_login, member_of in rows:
        kind = "user" if can_login else "role"
        print(f"- {name} ({kind}){': ' + ', '.join(member_of) if member_of else ''}")


def verify_users():
    """Log in as each user and compare its effective privileges with its role."""
    print("\n=== Verifying Access Control ===")
    failures = 0
    for username, entry in settings.DB_USERS.items():
        url = make_url(settings.DATABASE_URL).set(username=username, password=entry["password"])
        user_engine = create_engine(url)
        try:
            with user_engine.connect() as conn:
                rows = verify_role(conn, get_role(entry["role"]))
        except OperationalError as e:
            print(f"❌ {username}: cannot connect ({e.orig})")
            failures += 1
            continue
        finally:
            user_engine.dispose()

        print(f"\nConnected as {username} ({entry['role']})")
        for row in rows:
            if not (row["expected"] or row["granted"]):
                continue
            mark = "✓" if row["ok"] else "✗"
            verb = "granted" if row["granted"] else "denied"
            print(f"  {mark} {row['privilege']:<6} on {row['table']:<20} {verb}")
        bad = [r for r in rows if not r["ok"]]
        for row in bad:
            print(f"  ✗ {row['privilege']} on {row['table']}: expected "
                  f"{'granted' if row['expected'] else 'denied'}")
        failures += len(bad)
    return failures


def main():
    parser = argparse.ArgumentParser(description="Configure role-based access to the fleet database")
    parser.add_argument("--dry-run", action="store_true", help="Print statements without executing")
    parser.add_argument("--verify", action="store_true", help="Check each user's effective privileges")
    args = parser.parse_args()

    role_sql = build_role_statements()
    user_sql = build_user_statements()

    if args.dry_run:
        for sql in role_sql + user_sql:
            print(sql + ";")
        return

    if engine.dialect.name != "postgresql":
        print(f"❌ Access control needs PostgreSQL, DATABASE_URL uses '{engine.dialect.name}'")
        sys.exit(1)

    try:
        print("=== Creating Roles ===")
        apply_statements(role_sql)
        print("=== Creating Users ===")
        apply_statements(user_sql)
        list_roles()
        if args.verify and verify_users():
            sys.exit(1)
    except (OperationalError, ProgrammingError) as e:
        logger.error(f"Error setting up access control: {e}")
        sys.exit(1)

    print("\n✅ Access control configured. Use strong passwords in production (.env).")


if __name__ == "__main__":
    main()
