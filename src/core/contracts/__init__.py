"""
Contract Validation Module

Модуль для валидации JSON контрактов billing engine.
"""

from .validators import (
    BillingSnapshotValidator,
    ContractValidator,
    SchemaLoader,
    validate_billing_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BillingSnapshotValidator",
    # Functions
    "validate_billing_snapshot",
]
