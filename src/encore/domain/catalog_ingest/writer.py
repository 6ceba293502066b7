"""Idempotent persistence of surviving tracks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from encore.domain.model import Song

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from encore.domain.model import CatalogTrack
    from encore.domain.ports.unit_of_work import CatalogUnitOfWork

log = logging.getLogger(__name__)


def song_from_track(track: CatalogTrack) -> Song:
    return Song(
        spotify_id=track.id,
        isrc=track.isrc,
        name=track.name,
        album_name=track.release_name,
        album_id=track.release_id,
        artist=track.primary_artist_name,
        track_number=track.track_number,
        disc_number=track.disc_number or 1,
        album_art_url=track.artwork_url,
        release_date=track.release_date,
        duration_ms=track.duration_ms,
        popularity=track.popularity,
        preview_url=track.preview_url,
        spotify_uri=track.uri,
        external_url=track.external_url,
        is_explicit=track.explicit,
        is_playable=True if track.is_playable is None else track.is_playable,
        is_studio=True,
    )


class UpsertWriter:
    """Write one track per unit of work so a failing row only loses itself.

    ``write`` is a coroutine only to fit the batch processor. The session calls inside
    it are synchronous and never yield, so writes run one after another on the event
    loop and the batch concurrency does not parallelise them. Conflicting writes to the
    same Spotify id are resolved by the store's ``ON CONFLICT`` handling.
    """

    def __init__(self, unit_of_work_factory: Callable[[], CatalogUnitOfWork]) -> None:
        self._unit_of_work_factory = unit_of_work_factory

    async def write(self, track: CatalogTrack, *, artist_id: UUID) -> UUID:
        song = song_from_track(track)
        with self._unit_of_work_factory() as uow:
            song_id = uow.repositories.songs.upsert(song)
            created = uow.repositories.artist_songs.link(
                artist_id, song_id, is_primary_artist=True
            )
            uow.commit()
        log.debug(
            "Ingested studio track: %s (%s -> %s, new link: %s)",
            track.name,
            track.id,
            song_id,
            created,
        )
        return song_id
