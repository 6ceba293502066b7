"""Translate Spotify payloads into catalog entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from encore.domain.model import AcousticFeatures, CatalogRelease, CatalogTrack, ReleaseType

if TYPE_CHECKING:
    from .schema import SpotifyAlbum, SpotifyAudioFeatures, SpotifyImage, SpotifyTrack


def translate_release(album: SpotifyAlbum) -> CatalogRelease:
    return CatalogRelease(
        id=album.id,
        name=album.name,
        release_type=_release_type(album.album_type) or ReleaseType.ALBUM,
        release_group=_release_type(album.album_group),
        artist_ids=tuple(artist.id for artist in album.artists if artist.id),
        release_date=album.release_date,
        artwork_url=_first_image_url(album.images),
        total_tracks=album.total_tracks,
    )


def translate_track(track: SpotifyTrack, *, release: CatalogRelease | None = None) -> CatalogTrack:
    """Build a catalog track; album fields fall back to ``release`` for simplified payloads."""

    album = track.album
    if album is not None:
        release_id: str | None = album.id
        release_name: str | None = album.name
        artwork_url = _first_image_url(album.images)
        release_date = album.release_date
    elif release is not None:
        release_id = release.id
        release_name = release.name
        artwork_url = release.artwork_url
        release_date = release.release_date
    else:
        release_id = release_name = artwork_url = release_date = None

    is_playable = track.is_playable if track.is_playable is not None else not track.is_local

    return CatalogTrack(
        id=track.id,
        name=track.name,
        release_id=release_id,
        release_name=release_name,
        artist_names=tuple(artist.name for artist in track.artists),
        track_number=track.track_number,
        disc_number=track.disc_number,
        duration_ms=track.duration_ms,
        explicit=track.explicit,
        popularity=track.popularity,
        preview_url=track.preview_url,
        uri=track.uri,
        external_url=track.external_urls.get("spotify"),
        isrc=track.external_ids.get("isrc"),
        is_playable=is_playable,
        artwork_url=artwork_url,
        release_date=release_date,
    )


def translate_audio_features(payload: SpotifyAudioFeatures) -> AcousticFeatures:
    return AcousticFeatures(
        track_id=payload.id,
        liveness=payload.liveness,
        acousticness=payload.acousticness,
        danceability=payload.danceability,
        energy=payload.energy,
        instrumentalness=payload.instrumentalness,
        loudness=payload.loudness,
        speechiness=payload.speechiness,
        valence=payload.valence,
        tempo=payload.tempo,
        key=payload.key,
        mode=payload.mode,
        time_signature=payload.time_signature,
        duration_ms=payload.duration_ms,
    )


def _release_type(value: str | None) -> ReleaseType | None:
    if value is None:
        return None
    try:
        return ReleaseType(value.lower())
    except ValueError:
        return None


def _first_image_url(images: list[SpotifyImage]) -> str | None:
    return images[0].url if images else None
