from __future__ import annotations
import logging
from typing import Optional
from rich.logging import RichHandler
from .config import get_log_level

_logger_initialized = False


def resolve_log_level(level: Optional[str] = None) -> int:
    value = logging.getLevelName((level or get_log_level()).strip().upper())
    # неизвестное имя уровня getLevelName возвращает строкой
    return value if isinstance(value, int) else logging.INFO


def set_log_level(level: Optional[str]) -> None:
    logging.getLogger().setLevel(resolve_log_level(level))


def get_logger(name: str = "imgloader") -> logging.Logger:
    global _logger_initialized
    if not _logger_initialized:
        logging.basicConfig(
            level=resolve_log_level(),
            format="%(message)s",
            datefmt="%H:%M:%S",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        )
        _logger_initialized = True
    return logging.getLogger(name)
