"""Run-scoped ingest aggregate."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum


class IngestErrorType(StrEnum):
    ALBUM_TRACKS_FETCH = "album_tracks_fetch"
    TRACK_INGESTION = "track_ingestion"
    FATAL_ERROR = "fatal_error"

    @property
    def recoverable(self) -> bool:
        return self is not IngestErrorType.FATAL_ERROR


@dataclass(frozen=True, slots=True)
class IngestError:
    type: IngestErrorType
    message: str
    item: dict[str, object] | None = None


@dataclass(slots=True)
class IngestResult:
    """Counters and per-item errors collected while a run progresses.

    Created at run start and mutated by every stage. A caller that passes its own instance
    into the run keeps the partial counters when the run raises.
    """

    albums_processed: int = 0
    live_albums_filtered: int = 0
    tracks_processed: int = 0
    tracks_truncated: int = 0
    studio_tracks_ingested: int = 0
    live_features_filtered: int = 0
    live_name_filtered: int = 0
    duplicates_filtered: int = 0
    errors: list[IngestError] = field(default_factory=list["IngestError"])

    def add_error(
        self,
        error_type: IngestErrorType,
        message: str,
        item: dict[str, object] | None = None,
    ) -> None:
        self.errors.append(IngestError(type=error_type, message=message, item=item))

    def errors_of(self, error_type: IngestErrorType) -> list[IngestError]:
        return [error for error in self.errors if error.type is error_type]

    @property
    def live_tracks_filtered(self) -> int:
        return self.live_features_filtered + self.live_name_filtered

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["errors"] = [
            {"type": str(error.type), "message": error.message, "item": error.item}
            for error in self.errors
        ]
        return payload
