"""Logging setup for consulcat command line tools and applications.

The package disables its own loguru records on import; applications that want
request-level logs call ``configure_logging`` (or ``logger.enable("consulcat")``).
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from loguru import logger

PACKAGE_NAME = "consulcat"

DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message}"
)


def _normalize_scopes(debug_scopes: Iterable[str]) -> tuple[str, ...]:
    scopes: list[str] = []
    for scope in debug_scopes:
        cleaned = scope.strip()
        if not cleaned:
            continue
        if cleaned != PACKAGE_NAME and not cleaned.startswith(f"{PACKAGE_NAME}."):
            cleaned = f"{PACKAGE_NAME}.{cleaned}"
        scopes.append(cleaned)
    return tuple(scopes)


def _debug_scope_filter(scopes: tuple[str, ...]) -> Callable[[Any], bool]:
    def _filter(record: Any) -> bool:
        if record["level"].name != "DEBUG":
            return False
        name = record["name"] or ""
        return any(name == scope or name.startswith(f"{scope}.") for scope in scopes)

    return _filter


def _stderr_sink(message: str) -> None:
    # sys.stderr is looked up on every write
    sys.stderr.write(message)


def configure_logging(
    level: str,
    *,
    debug_scopes: Iterable[str] = (),
    colorize: bool = False,
    sink: TextIO | Callable[[str], None] | None = None,
) -> tuple[int, ...]:
    """Configure loguru with module-based debug filtering.

    ``debug_scopes`` names modules (``"core.transport"`` or the full
    ``"consulcat.core.transport"``) whose DEBUG records are shown even when
    ``level`` is higher.
    """
    logger.remove()
    logger.enable(PACKAGE_NAME)
    target = sink if sink is not None else _stderr_sink

    handler_ids: list[int] = [
        logger.add(
            target,
            level=level,
            format=DEFAULT_LOG_FORMAT,
            colorize=colorize,
        )
    ]

    scopes = _normalize_scopes(debug_scopes)
    if scopes and level.upper() != "DEBUG":
        handler_ids.append(
            logger.add(
                target,
                level="DEBUG",
                format=DEFAULT_LOG_FORMAT,
                colorize=colorize,
                filter=_debug_scope_filter(scopes),
            )
        )

    return tuple(handler_ids)
