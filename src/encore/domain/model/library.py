"""Persistent catalog-store entities.

These are plain dataclasses; the SQLAlchemy adapter maps them imperatively.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class Artist:
    name: str
    spotify_id: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(eq=False, kw_only=True)
class Song:
    """A studio recording in the catalog store, keyed by its Spotify id."""

    spotify_id: str
    name: str
    artist: str
    isrc: str | None = None
    album_name: str | None = None
    album_id: str | None = None
    track_number: int | None = None
    disc_number: int = 1
    album_art_url: str | None = None
    release_date: str | None = None
    duration_ms: int | None = None
    popularity: int = 0
    preview_url: str | None = None
    spotify_uri: str | None = None
    external_url: str | None = None
    is_explicit: bool = False
    is_playable: bool = True
    is_studio: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(eq=False, kw_only=True)
class ArtistSongLink:
    artist_id: uuid.UUID
    song_id: uuid.UUID
    is_primary_artist: bool = True
    created_at: datetime = field(default_factory=_utcnow)
