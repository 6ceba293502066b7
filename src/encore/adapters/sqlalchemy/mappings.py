"""SQLAlchemy mapping metadata for the catalog store."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from encore.domain.model import Artist, ArtistSongLink, IngestJob, JobStatus, Song

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

artist_table = Table(
    "artist",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("spotify_id", String, nullable=True, unique=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

song_table = Table(
    "song",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("spotify_id", String, nullable=False, unique=True),
    Column("isrc", String, nullable=True),
    Column("name", String, nullable=False),
    Column("album_name", String, nullable=True),
    Column("album_id", String, nullable=True),
    Column("artist", String, nullable=False),
    Column("track_number", Integer, nullable=True),
    Column("disc_number", Integer, nullable=False, default=1),
    Column("album_art_url", String, nullable=True),
    Column("release_date", String, nullable=True),
    Column("duration_ms", Integer, nullable=True),
    Column("popularity", Integer, nullable=False, default=0),
    Column("preview_url", String, nullable=True),
    Column("spotify_uri", String, nullable=True),
    Column("external_url", String, nullable=True),
    Column("is_explicit", Boolean, nullable=False, default=False),
    Column("is_playable", Boolean, nullable=False, default=True),
    Column("is_studio", Boolean, nullable=False, default=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_song_isrc", "isrc"),
)

artist_song_table = Table(
    "artist_song",
    mapper_registry.metadata,
    Column(
        "artist_id",
        UUIDColumnType,
        ForeignKey("artist.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "song_id",
        UUIDColumnType,
        ForeignKey("song.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("is_primary_artist", Boolean, nullable=False, default=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

ingest_job_table = Table(
    "ingest_job",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "artist_id",
        UUIDColumnType,
        ForeignKey("artist.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("spotify_id", String, nullable=False),
    Column("concurrency", Integer, nullable=True),
    Column(
        "status",
        Enum(
            JobStatus,
            native_enum=False,
            length=16,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    ),
    Column("stage", String, nullable=False),
    Column("progress", Integer, nullable=False, default=0),
    Column("message", String, nullable=True),
    Column("error", String, nullable=True),
    Column("result", JSON, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("started_at", UTCDateTime(), nullable=True),
    Column("finished_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_ingest_job_status_created_at", "status", "created_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the catalog model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Artist, artist_table)
    mapper_registry.map_imperatively(Song, song_table)
    mapper_registry.map_imperatively(ArtistSongLink, artist_song_table)
    mapper_registry.map_imperatively(IngestJob, ingest_job_table)

    configure_mappers()
    return mapper_registry
