"""Настройка логирования."""

import logging
from typing import Optional

from .config import LOG_LEVEL, LOG_FORMAT


def setup_logging(name: str = "pathtracer", level: Optional[str] = None) -> logging.Logger:
    """
    Настраивает логгер пакета: один обработчик в консоль.

    Параметры:
        name: имя логгера
        level: уровень (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Возвращает настроенный логгер. Повторный вызов не добавляет
    второй обработчик.
    """
    if level is None:
        level = LOG_LEVEL

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger
