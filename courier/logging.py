"""Logging configuration for courier.

Structured logging via loguru. Logging is disabled by default (library
behavior) and enabled by ``setup_logging`` or by a ``Network`` created with
a ``LogConfig``.

Example:
    from courier.logging import LogConfig, setup_logging, teardown_logging

    handler_ids = setup_logging(LogConfig(level="DEBUG", file="courier.log"))
    ...
    teardown_logging(handler_ids)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger
from rich.logging import RichHandler

# Disable by default (library behavior)
logger.disable("courier")

type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

# Format for file output (no colors)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message} | {extra}"
)


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Logging configuration.

    Attributes:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        file: Path to log file. If provided, logs are written to this file.
        console: Whether to log to the console. Defaults to True.
        rotation: File rotation policy (e.g., "50 MB", "1 day"). Defaults to "50 MB".
        retention: Number of old log files to keep. Defaults to 10.
        compression: Archive format applied to closed log files, or None.
    """

    level: LogLevel = "INFO"
    file: str | None = None
    console: bool = True
    rotation: str = "50 MB"
    retention: int = 10
    compression: str | None = "zip"


def setup_logging(config: LogConfig) -> list[int]:
    """Configure logging and return handler IDs for cleanup."""
    logger.enable("courier")
    handler_ids: list[int] = []

    if config.console:
        hid = logger.add(
            RichHandler(show_time=True, show_level=True, show_path=True, rich_tracebacks=True),
            level=config.level,
            format="{message}",
            filter="courier",
        )
        handler_ids.append(hid)

    if config.file:
        hid = logger.add(
            config.file,
            level="DEBUG",  # File always captures everything
            format=FILE_FORMAT,
            rotation=config.rotation,
            retention=config.retention,
            compression=config.compression,
            diagnose=False,  # Don't expose request data in tracebacks
            enqueue=True,
            filter="courier",
        )
        handler_ids.append(hid)

    return handler_ids


def teardown_logging(handler_ids: list[int]) -> None:
    """Remove handlers and disable logging."""
    for hid in handler_ids:
        logger.remove(hid)
    logger.disable("courier")


class NetworkLogger:
    """Leveled network log backed by loguru.

    ``alert`` is for failures an operator has to look at; it is written at
    ERROR with ``alert=True`` bound so sinks can route it.
    """

    def __init__(self) -> None:
        self._log = logger.bind(component="network")

    def info(
        self,
        message: str,
        send_now: bool = False,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self._log.bind(send_now=send_now, context=dict(context or {})).info(message)

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._log.bind(context=dict(context or {})).warning(message)

    def alert(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        self._log.bind(alert=True, context=dict(context or {})).error(message)
