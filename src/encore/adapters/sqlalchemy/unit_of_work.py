"""SQLAlchemy-backed unit of work for the catalog store.

``startup()`` binds the module to one engine, applies migrations and builds the session
factory; every ``SqlAlchemyCatalogUnitOfWork`` then opens a fresh session from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from encore.adapters.sqlalchemy.mappings import start_mappers
from encore.adapters.sqlalchemy.migrations import upgrade_head
from encore.adapters.sqlalchemy.repositories import (
    SqlAlchemyArtistRepository,
    SqlAlchemyArtistSongRepository,
    SqlAlchemyIngestJobRepository,
    SqlAlchemySongRepository,
)
from encore.config import get_database_config
from encore.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the catalog store is used before ``startup()`` or started twice."""


@dataclass(frozen=True, slots=True)
class _CatalogDatabase:
    engine: Engine
    sessions: sessionmaker[Session]


_database: _CatalogDatabase | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the catalog store to an engine and bring its schema to the latest revision."""

    global _database  # noqa: PLW0603
    if _database is not None and not force:
        raise StartupError("Catalog store already started. Pass force=True to rebind it.")

    resolved = engine or create_engine(database_uri or get_database_config().uri, future=True)
    start_mappers()
    upgrade_head(engine=resolved)
    _database = _CatalogDatabase(
        engine=resolved,
        sessions=sessionmaker(bind=resolved, expire_on_commit=False),
    )
    log.debug("Catalog store bound to %s", resolved.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _database.engine if _database is not None else None


def is_started() -> bool:
    return _database is not None


def shutdown() -> None:
    """Dispose the engine and forget it; the next unit of work needs ``startup()`` again."""

    global _database  # noqa: PLW0603
    if _database is not None:
        _database.engine.dispose()
    _database = None


def _session_factory() -> sessionmaker[Session]:
    if _database is None:
        raise StartupError(
            "Catalog store not started. Call encore.adapters.sqlalchemy.startup() first."
        )
    return _database.sessions


class SqlAlchemyCatalogUnitOfWork:
    """One session and its catalog repositories; rolled back when the block raises."""

    def __init__(self) -> None:
        self._sessions = _session_factory()
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        session = self._sessions()
        self._session = session
        self._repositories = CatalogRepositories(
            artists=SqlAlchemyArtistRepository(session),
            songs=SqlAlchemySongRepository(session),
            artist_songs=SqlAlchemyArtistSongRepository(session),
            jobs=SqlAlchemyIngestJobRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not open")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session


if TYPE_CHECKING:
    from encore.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
