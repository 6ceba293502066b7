"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite

from encore.adapters.sqlalchemy.mappings import (
    artist_song_table,
    artist_table,
    ingest_job_table,
    song_table,
)
from encore.domain.model import Artist, IngestJob, JobStatus, Song

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session

# columns refreshed when a song is ingested again; identity and flags stay as first written
SONG_UPSERT_COLUMNS = (
    "name",
    "album_name",
    "artist",
    "track_number",
    "disc_number",
    "album_art_url",
    "release_date",
    "popularity",
    "preview_url",
    "updated_at",
)


def _dialect_insert(session: Session):  # noqa: ANN202
    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        return sqlite.insert
    if dialect == "postgresql":
        return postgresql.insert
    raise NotImplementedError(f"Upserts are not supported for dialect {dialect!r}")


def _song_values(song: Song) -> dict[str, object]:
    return {column.key: getattr(song, column.key) for column in song_table.columns}


class SqlAlchemyArtistRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Artist) -> None:
        self.session.add(entity)

    def get(self, artist_id: uuid.UUID) -> Artist | None:
        return self.session.get(Artist, artist_id)

    def get_by_spotify_id(self, spotify_id: str) -> Artist | None:
        stmt = select(Artist).where(artist_table.c.spotify_id == spotify_id)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemySongRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert(self, song: Song) -> uuid.UUID:
        insert = _dialect_insert(self.session)
        stmt = insert(song_table).values(**_song_values(song))
        stmt = stmt.on_conflict_do_update(
            index_elements=[song_table.c.spotify_id],
            set_={name: stmt.excluded[name] for name in SONG_UPSERT_COLUMNS},
        ).returning(song_table.c.id)
        return self.session.execute(stmt).scalar_one()

    def get_by_spotify_id(self, spotify_id: str) -> Song | None:
        stmt = select(Song).where(song_table.c.spotify_id == spotify_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def list_for_artist(self, artist_id: uuid.UUID) -> list[Song]:
        stmt = (
            select(Song)
            .join(artist_song_table, artist_song_table.c.song_id == song_table.c.id)
            .where(artist_song_table.c.artist_id == artist_id)
            .order_by(song_table.c.name)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyArtistSongRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def link(
        self,
        artist_id: uuid.UUID,
        song_id: uuid.UUID,
        *,
        is_primary_artist: bool = True,
    ) -> bool:
        insert = _dialect_insert(self.session)
        stmt = (
            insert(artist_song_table)
            .values(
                artist_id=artist_id,
                song_id=song_id,
                is_primary_artist=is_primary_artist,
                created_at=datetime.now(UTC),
            )
            .on_conflict_do_nothing(
                index_elements=[artist_song_table.c.artist_id, artist_song_table.c.song_id]
            )
        )
        result = self.session.execute(stmt)
        return result.rowcount > 0  # pyright: ignore[reportAttributeAccessIssue]

    def count_for_artist(self, artist_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(artist_song_table)
            .where(artist_song_table.c.artist_id == artist_id)
        )
        return self.session.execute(stmt).scalar_one()


class SqlAlchemyIngestJobRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: IngestJob) -> None:
        self.session.add(entity)

    def get(self, job_id: uuid.UUID) -> IngestJob | None:
        return self.session.get(IngestJob, job_id)

    def next_queued(self) -> IngestJob | None:
        stmt = (
            select(IngestJob)
            .where(ingest_job_table.c.status == JobStatus.QUEUED)
            .order_by(ingest_job_table.c.created_at)
            .limit(1)
            .with_for_update(skip_locked=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()
