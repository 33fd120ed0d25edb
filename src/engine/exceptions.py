"""
Исключения движка пересчёта.

В режиме по умолчанию движок не выбрасывает исключений: команды тотальны.
Исключения ниже используются только при EngineConfig(strict=True).
"""


class BillingEngineError(Exception):
    """Базовое исключение движка пересчёта."""
    pass


class UnknownEntityError(BillingEngineError):
    """Команда ссылается на несуществующий id (strict mode)."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"Unknown {entity} id: {entity_id!r}")


class UnknownTaxTypeError(BillingEngineError):
    """Нераспознанный tax_type (strict mode)."""

    def __init__(self, tax_id: str, tax_type: object):
        self.tax_id = tax_id
        self.tax_type = tax_type
        super().__init__(f"Unknown tax_type {tax_type!r} for tax {tax_id!r}")
