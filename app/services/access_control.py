# app/services/access_control.py
"""
Role-based database access for the fleet tables (PostgreSQL).

Three group roles, one login user each:
  data_analyst_role  : read-only on every fleet table
  fleet_manager_role : full CRUD on vehicles and shipments, read-only telemetry
  logistics_app_role : telemetry ingestion only, no access to vehicles/shipments

Used by scripts/setup/configure_access.py. Statements are plain SQL strings so
they can be reviewed or applied by hand.
"""

import re
from dataclasses import dataclass, field

from sqlalchemy import text

from app.config import settings

READ = ("SELECT",)
CRUD = ("SELECT", "INSERT", "UPDATE", "DELETE")

# maintenance entries are part of a vehicle and follow its grants
TABLE_GROUPS = {
    "vehicles": ("vehicles", "maintenance_records"),
    "shipments": ("shipments",),
    "telemetry": ("telemetry",),
}

# sequences behind SERIAL ids, needed by INSERT
SEQUENCES = {
    "maintenance_records": "maintenance_records_id_seq",
    "telemetry": "telemetry_id_seq",
}

DUPLICATE_OBJECT = "42710"   # PostgreSQL: role already exists

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


@dataclass(frozen=True)
class RoleDefinition:
    name: str
    description: str
    privileges: dict = field(default_factory=dict)   # collection -> privileges


ROLES = [
    RoleDefinition("data_analyst_role", "Read-only analytics access",
                   {"vehicles": READ, "shipments": READ, "telemetry": READ}),
    RoleDefinition("fleet_manager_role", "Manages vehicles and shipments",
                   {"vehicles": CRUD, "shipments": CRUD, "telemetry": READ}),
    RoleDefinition("logistics_app_role", "Telemetry ingestion service",
                   {"telemetry": CRUD}),
]


def _ident(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid role or user name: {name!r}")
    return name


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def get_role(name: str) -> RoleDefinition:
    for role in ROLES:
        if role.name == name:
            return role
    raise KeyError(name)


def table_privileges(role: RoleDefinition) -> dict:
    """Expand collection-level grants to {table: set(privileges)}."""
    result = {}
    for collection, privileges in role.privileges.items():
        for table in TABLE_GROUPS[collection]:
            result[table] = set(privileges)
    return result


def build_role_statements(roles=None) -> list[str]:
    """CREATE ROLE + GRANT statements for every group role."""
    statements = []
    for role in roles or ROLES:
        name = _ident(role.name)
        statements.append(f"CREATE ROLE {name} NOLOGIN")
        for table, privileges in table_privileges(role).items():
            ordered = [p for p in CRUD if p in privileges]
            statements.append(f"GRANT {', '.join(ordered)} ON {table} TO {name}")
            if "INSERT" in privileges and table in SEQUENCES:
                statements.append(f"GRANT USAGE, SELECT ON SEQUENCE {SEQUENCES[table]} TO {name}")
    return statements


def build_user_statements(users: dict = None) -> list[str]:
    """CREATE ROLE ... LOGIN for each user, then membership in its group role."""
    statements = []
    for username, entry in (users or settings.DB_USERS).items():
        user = _ident(username)
        statements.append(f"CREATE ROLE {user} LOGIN PASSWORD {quote_literal(entry['password'])}")
        statements.append(f"GRANT {_ident(entry['role'])} TO {user}")
    return statements


def is_duplicate_object(exc: Exception) -> bool:
    return getattr(getattr(exc, "orig", None), "pgcode", None) == DUPLICATE_OBJECT


def check_privilege(conn, table: str, privilege: str) -> bool:
    """Ask PostgreSQL whether the connected user holds a table privilege."""
    return bool(conn.execute(
        text("SELECT has_table_privilege(current_user, :table, :privilege)"),
        {"table": table, "privilege": privilege},
    ).scalar())


def verify_role(conn, role: RoleDefinition) -> list[dict]:
    """
    Compare granted privileges with the role definition for every fleet table.
    Returns one row per (table, privilege) with expected/actual flags.
    """
    expected = table_privileges(role)
    rows = []
    for tables in TABLE_GROUPS.values():
        for table in tables:
            for privilege in CRUD:
                want = privilege in expected.get(table, set())
                have = check_privilege(conn, table, privilege)
                rows.append({"table": table, "privilege": privilege,
                             "expected": want, "granted": have, "ok": want == have})
    return rows
