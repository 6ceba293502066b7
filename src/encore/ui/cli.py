from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from encore.app import (
    analyze_catalog,
    create_artist,
    get_job,
    ingest_artist_catalog,
    run_ingest_worker,
    submit_catalog_ingest,
)
from encore.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {parsed}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest studio catalogs from Spotify")
    subparsers = parser.add_subparsers(dest="command", required=True)

    artist = subparsers.add_parser("artist", help="Artist management commands")
    artist_sub = artist.add_subparsers(dest="artist_command", required=True)
    artist_add = artist_sub.add_parser("add", help="Add an artist to the catalog store")
    artist_add.add_argument("--name", type=str, required=True, help="Display name")
    artist_add.add_argument(
        "--spotify-id",
        type=str,
        required=True,
        help="Spotify artist id used for catalog ingest",
    )

    ingest = subparsers.add_parser("ingest", help="Ingest an artist's studio catalog now")
    ingest.add_argument("--artist-id", type=str, required=True, help="Stored artist id")
    ingest.add_argument(
        "--concurrency",
        type=_positive_int,
        help="Parallel album/track operations (defaults to config)",
    )

    submit = subparsers.add_parser("submit", help="Queue a catalog ingest job")
    submit.add_argument("--artist-id", type=str, required=True, help="Stored artist id")
    submit.add_argument(
        "--concurrency",
        type=_positive_int,
        help="Parallel album/track operations (defaults to config)",
    )

    worker = subparsers.add_parser("worker", help="Process queued ingest jobs")
    worker.add_argument(
        "--max-jobs",
        type=_positive_int,
        help="Stop after this many jobs",
    )
    worker.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds to wait between polls of an empty queue",
    )
    worker.add_argument(
        "--once",
        action="store_true",
        help="Exit as soon as the queue is empty",
    )

    job = subparsers.add_parser("job", help="Ingest job commands")
    job_sub = job.add_subparsers(dest="job_command", required=True)
    job_status = job_sub.add_parser("status", help="Show the state of an ingest job")
    job_status.add_argument("job_id", type=str, help="Job id returned by submit")

    analyze = subparsers.add_parser(
        "analyze",
        help="Sample how much of an artist's catalog the studio filter removes",
    )
    analyze.add_argument("--spotify-id", type=str, required=True, help="Spotify artist id")
    analyze.add_argument(
        "--limit",
        type=_positive_int,
        default=50,
        help="Number of tracks to sample (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _validate(parsed_args: argparse.Namespace) -> None:
    for name in ("artist_id", "job_id"):
        value = getattr(parsed_args, name, None)
        if value is not None:
            setattr(parsed_args, name, _parse_uuid(value))


def _run(parsed_args: argparse.Namespace) -> None:
    if parsed_args.command == "artist" and parsed_args.artist_command == "add":
        artist = create_artist(name=parsed_args.name, spotify_id=parsed_args.spotify_id)
        log.info("Artist %s stored as %s", artist.name, artist.id)
    elif parsed_args.command == "ingest":
        result = ingest_artist_catalog(
            artist_id=parsed_args.artist_id,
            concurrency=parsed_args.concurrency,
        )
        log.info("Ingest result: %s", json.dumps(result.to_dict()))
    elif parsed_args.command == "submit":
        job_id = submit_catalog_ingest(
            artist_id=parsed_args.artist_id,
            concurrency=parsed_args.concurrency,
        )
        log.info("Queued ingest job %s", job_id)
    elif parsed_args.command == "worker":
        run_ingest_worker(
            max_jobs=parsed_args.max_jobs,
            poll_interval=parsed_args.poll_interval,
            stop_when_idle=parsed_args.once,
        )
    elif parsed_args.command == "job" and parsed_args.job_command == "status":
        job = get_job(parsed_args.job_id)
        log.info(
            "Job %s: status=%s, stage=%s, progress=%s%%, message=%s, error=%s",
            job.id,
            job.status,
            job.stage,
            job.progress,
            job.message,
            job.error,
        )
    elif parsed_args.command == "analyze":
        sample = analyze_catalog(spotify_id=parsed_args.spotify_id, limit=parsed_args.limit)
        log.info(
            "Sampled %s tracks: %s studio, %s live (%s by liveness, %s by name), %.0f%% filtered",
            sample.total_tracks,
            sample.studio_tracks,
            sample.live_tracks_filtered,
            sample.live_features_filtered,
            sample.live_name_filtered,
            sample.live_share * 100,
        )
    else:
        raise ValueError(f"Unsupported command: {parsed_args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args)
    except Exception:
        log.exception("Fatal error during ingest")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
