"""Root logger setup for the ``encore`` CLI and worker."""

from __future__ import annotations

import logging
import os
from typing import Final

LOG_LEVEL_ENV: Final[str] = "ENCORE_LOG_LEVEL"

# Per-request and per-migration chatter; ingest progress is logged by encore itself.
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "hishel", "alembic.runtime.migration")


def _level_from_env(default: int) -> int:
    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelNamesMapping().get(name)
    if level is None:
        return default
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger for terminal output.

    ``level`` wins over ``ENCORE_LOG_LEVEL``, which wins over INFO. Third-party loggers
    never log below WARNING.
    """

    effective = level if level is not None else _level_from_env(logging.INFO)
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
