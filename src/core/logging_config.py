"""
Logging setup для billing engine.

Модули используют logging.getLogger(__name__); здесь настраивается
только корневой логгер пакета "src". Файловых handler'ов нет:
движок не выполняет I/O в хранилище.
"""

import logging
from typing import Union

LOGGER_NAME = "src"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Настройка логгера пакета с одним console handler.

    Повторный вызов не дублирует handler'ы, только меняет уровень.

    Args:
        level: Уровень логирования (int или имя, например "DEBUG")

    Returns:
        Настроенный логгер пакета
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)

    logger.debug("Logging configured at level %s", logging.getLevelName(logger.level))
    return logger
