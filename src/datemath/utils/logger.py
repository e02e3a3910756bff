"""
Logging configuration

Библиотека пишет через structlog.get_logger(__name__); setup_logger подключает
вывод приложения: stdout и (опционально) файл, консольный или JSON формат.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog


def setup_logger(
    name: Optional[str] = None,
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False
) -> structlog.BoundLogger:
    """
    Set up structured logging for datemath.

    Args:
        name: Logger name (module path)
        level: Minimum level, e.g. "DEBUG" to see rejected expressions
        log_file: Optional file that receives the same records as stdout
        json_format: Render records as JSON lines instead of console text
    """
    log_level = getattr(logging, level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    # force: заменить handlers, уже установленные на root logger
    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=handlers,
        force=True
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False
    )

    return structlog.get_logger(name)
