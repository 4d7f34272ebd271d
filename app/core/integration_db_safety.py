from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.engine import make_url

LOCAL_DB_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "postgres", "marketplace_postgres"})
IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class IntegrationDbTarget:
    database_name: str
    host: str
    problem: str | None

    @property
    def is_safe(self) -> bool:
        return self.problem is None


def inspect_integration_db_target(database_url: str) -> IntegrationDbTarget:
    """Decides whether a database may be wiped by the integration suite."""
    parsed = make_url(database_url)
    database_name = (parsed.database or "").strip()
    host = (parsed.host or "").strip().lower()

    problem: str | None = None
    if parsed.get_backend_name() != "postgresql":
        problem = "only PostgreSQL databases are supported"
    elif not database_name:
        problem = "database name is empty"
    elif "test" not in database_name.lower():
        problem = "database name must contain 'test'"
    elif IDENTIFIER_RE.fullmatch(database_name) is None:
        problem = "database name must be a plain identifier"
    elif host not in LOCAL_DB_HOSTS:
        problem = f"host '{host}' is not a local test host"

    return IntegrationDbTarget(database_name=database_name, host=host, problem=problem)


def assert_safe_integration_db(database_url: str) -> None:
    target = inspect_integration_db_target(database_url)
    if target.is_safe:
        return
    raise RuntimeError(
        "Refusing to truncate marketplace tables: "
        f"{target.problem} (database='{target.database_name}', host='{target.host}')"
    )
