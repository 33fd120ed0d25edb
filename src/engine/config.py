"""Конфигурация движка пересчёта."""

import uuid
from dataclasses import dataclass, field
from typing import Callable

from src.core.math.numerical_safeguards import MONEY_DECIMALS_DEFAULT


def uuid_id() -> str:
    """Идентификатор по умолчанию: uuid4 в строковом виде."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class EngineConfig:
    """
    Конфигурация RecalculationEngine / BillingSession.

    - id_factory: генератор идентификаторов новых сущностей
    - strict: неизвестный id или tax_type → исключение вместо no-op / 0
    - money_decimals: знаков после запятой при отображении сумм
    """
    id_factory: Callable[[], str] = field(default=uuid_id)
    strict: bool = False
    money_decimals: int = MONEY_DECIMALS_DEFAULT

    def __post_init__(self):
        if self.money_decimals < 0:
            raise ValueError(f"money_decimals must be non-negative, got {self.money_decimals}")
