"""Root logger setup for the CLI and the webhook server."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger with a compact, timestamped format.

    Uvicorn installs its own handlers for access logs; application modules log
    through the root logger configured here. ``force=True`` replaces handlers
    that were installed earlier.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
