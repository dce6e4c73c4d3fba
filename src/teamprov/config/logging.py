"""Root logger setup for the command line."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger with a terse, timestamped format.

    ``force=True`` replaces handlers installed earlier, e.g. when ``--verbose``
    switches to DEBUG after the defaults were applied.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # Keep per-request httpx lines out of the INFO log.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
