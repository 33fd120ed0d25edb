"""BillingSession — владелец текущего снапшота.

Заменяет общий глобальный контейнер состояния: представление держит
ссылку на сессию, отправляет команды через dispatch() и получает новый
снапшот после каждой команды (return value или подписка).

Команды применяются строго по одной в порядке отправки. Команда,
отправленная из listener'а во время уведомления, ставится в очередь
и применяется после завершения текущей.
"""

import logging
from collections import deque
from typing import Callable, Optional

from src.core.domain import BillingSnapshot

from .commands import AddItem, AddTax, BillingCommand, UpdateItem, UpdateItemTax, UpdateTax
from .config import EngineConfig
from .recalculation import CommandResult, RecalculationEngine

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[BillingSnapshot], None]


class BillingSession:
    """Сессия редактирования счёта (in-memory, single-threaded)."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        engine: Optional[RecalculationEngine] = None,
        snapshot: Optional[BillingSnapshot] = None,
    ):
        """
        Args:
            config: конфигурация (игнорируется, если передан engine)
            engine: готовый движок пересчёта
            snapshot: начальный снапшот (default: пустой)
        """
        self.engine = engine or RecalculationEngine(config)
        self._snapshot = snapshot or BillingSnapshot()
        self._last_result: Optional[CommandResult] = None
        self._listeners: list[SnapshotListener] = []
        self._queue: deque[BillingCommand] = deque()
        self._dispatching = False

    @property
    def config(self) -> EngineConfig:
        return self.engine.config

    @property
    def snapshot(self) -> BillingSnapshot:
        """Текущий снапшот (read-only)."""
        return self._snapshot

    @property
    def last_result(self) -> Optional[CommandResult]:
        return self._last_result

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Подписка на новые снапшоты. Возвращает функцию отписки."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, command: BillingCommand) -> BillingSnapshot:
        """Применение команды.

        Вложенный вызов (из listener'а) только ставит команду в очередь
        и возвращает текущий снапшот; команда будет применена после
        текущей, до возврата из внешнего dispatch().

        При исключении (strict mode) очередь сбрасывается, снапшот
        остаётся последним согласованным.
        """
        self._queue.append(command)
        if self._dispatching:
            logger.debug("%s queued behind running command", command.command_name)
            return self._snapshot

        self._dispatching = True
        try:
            while self._queue:
                result = self.engine.apply(self._snapshot, self._queue.popleft())
                self._snapshot = result.snapshot
                self._last_result = result
                for listener in list(self._listeners):
                    listener(result.snapshot)
        except Exception:
            dropped = len(self._queue)
            self._queue.clear()
            if dropped:
                logger.warning("Command failed, %d queued command(s) dropped", dropped)
            raise
        finally:
            self._dispatching = False

        return self._snapshot

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------

    def add_item(self, **fields) -> BillingSnapshot:
        return self.dispatch(AddItem(**fields))

    def add_tax(self, **fields) -> BillingSnapshot:
        return self.dispatch(AddTax(**fields))

    def update_item(self, item_id: str, **fields) -> BillingSnapshot:
        return self.dispatch(UpdateItem(id=item_id, **fields))

    def update_tax(self, tax_id: str, **fields) -> BillingSnapshot:
        return self.dispatch(UpdateTax(id=tax_id, **fields))

    def update_item_tax(self, row_id: str, **fields) -> BillingSnapshot:
        return self.dispatch(UpdateItemTax(id=row_id, **fields))
