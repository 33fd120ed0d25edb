"""
Тесты для logging setup и логирования движка

Проверяет:
1. configure_logging не дублирует handler'ы
2. No-op по неизвестному id логируется на уровне INFO
3. Применённые команды логируются на уровне DEBUG
"""

import logging

import pytest

from src.core.domain import BillingSnapshot
from src.core.logging_config import LOGGER_NAME, configure_logging
from src.engine import AddItem, RecalculationEngine, UpdateTax


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


class TestConfigureLogging:
    """Тесты configure_logging"""

    def test_single_handler_on_repeated_calls(self, package_logger: logging.Logger) -> None:
        configure_logging()
        configure_logging("DEBUG")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG

    def test_returns_package_logger(self, package_logger: logging.Logger) -> None:
        assert configure_logging(logging.WARNING) is package_logger


class TestEngineLogging:
    """Тесты сообщений движка"""

    def test_unknown_id_logged_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="src.engine"):
            RecalculationEngine().apply(BillingSnapshot(), UpdateTax(id="missing", charge_value=1))

        assert "UPDATE_TAX ignored: unknown tax id 'missing'" in caplog.text

    def test_applied_command_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="src.engine"):
            RecalculationEngine().apply(BillingSnapshot(), AddItem(name="A"))

        assert any(
            record.levelno == logging.DEBUG and "ADD_ITEM applied=True" in record.getMessage()
            for record in caplog.records
        )
