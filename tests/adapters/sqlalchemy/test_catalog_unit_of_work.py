from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from encore.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from encore.domain.model import Artist

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyCatalogUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_repositories_outside_context_raise(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyCatalogUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_uncommitted_work_is_rolled_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.artists.add(Artist(name="Ghost", spotify_id="ghost"))
        uow.session.flush()
        raise RuntimeError("abort")

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.artists.get_by_spotify_id("ghost") is None


def test_committed_work_is_visible_to_next_unit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    artist = Artist(name="Keane", spotify_id="keane")

    with SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.artists.add(artist)
        uow.commit()

    with SqlAlchemyCatalogUnitOfWork() as uow:
        loaded = uow.repositories.artists.get(artist.id)
    assert loaded is not None
    assert loaded.spotify_id == "keane"
