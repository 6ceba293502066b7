"""Alembic environment for the catalog store.

``upgrade_head(engine=...)`` hands over an open connection through
``config.attributes["connection"]``; the ``alembic`` CLI goes through the configured URL.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from encore.adapters.sqlalchemy import mapper_registry, start_mappers
from encore.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config
log = logging.getLogger("alembic.env")

start_mappers()
target_metadata = mapper_registry.metadata

# SQLite cannot ALTER most constraints in place; batch mode rebuilds the table instead.
_MIGRATION_OPTIONS: dict[str, object] = {
    "target_metadata": target_metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_MIGRATION_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    context.configure(url=_database_url(), literal_binds=True, **_MIGRATION_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    shared: Connection | None = config.attributes.get("connection")
    if shared is not None:
        _migrate(shared)
        return

    engine = create_engine(_database_url(), poolclass=pool.NullPool, future=True)
    log.info("Migrating %s", engine.url.render_as_string(hide_password=True))
    try:
        with engine.connect() as connection:
            _migrate(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
