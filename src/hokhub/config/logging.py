"""Shared logging helpers for hokhub."""

from __future__ import annotations

import logging

_CHATTY_LIBRARIES = ("httpx", "httpcore", "sqlalchemy.engine")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger for CLI use.

    Defaults to INFO with a terse format. HTTP and SQL libraries are capped at
    WARNING unless ``level`` asks for DEBUG, so webhook posts do not flood the
    moderation log. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    library_level = level if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(library_level)
