"""Nested transactions with SAVEPOINT support on top of a ConnectionExecutor."""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Optional, Sequence

from .connection import get_executor
from .errors import TransactionError
from .executor import ConnectionExecutor, QueryFactoryMixin

logger = logging.getLogger("clausework")


class TransactionManager:

    def __init__(self, executor_factory: Callable[[], ConnectionExecutor]):
        """
        Initialize the transaction manager.

        Args:
            executor_factory: A callable that returns a ConnectionExecutor
        """
        self._executor_factory = executor_factory
        self._local = threading.local()

    def _get_executor(self) -> ConnectionExecutor:
        """Executor of the current thread, opened on first use and kept for later transactions."""
        if not hasattr(self._local, "executor"):
            self._local.executor = self._executor_factory()
        return self._local.executor

    @property
    def level(self) -> int:
        """Nesting depth of the current thread's open transactions (0 outside any)."""
        return getattr(self._local, "level", 0)

    def _enter_level(self) -> int:
        self._local.level = self.level + 1
        return self._local.level

    def _leave_level(self) -> None:
        self._local.level = max(0, self.level - 1)

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions with SAVEPOINT support.

        The outermost level commits (or rolls back) the connection; nested levels
        release (or roll back to) a savepoint, so an inner failure leaves the
        outer transaction usable.

        Yields:
            Transaction: a QueryExecutor bound to this nesting level
        """
        executor = self._get_executor()
        new_level = self._enter_level()
        savepoint_name = f"savepoint_{new_level}" if new_level > 1 else None
        transaction_obj = Transaction(executor, self, new_level)

        try:
            if savepoint_name:
                logger.info("SAVEPOINT %s", savepoint_name)
                executor.execute(f"SAVEPOINT {savepoint_name}")

            yield transaction_obj

            if savepoint_name:
                logger.info("RELEASE SAVEPOINT %s", savepoint_name)
                executor.execute(f"RELEASE SAVEPOINT {savepoint_name}")
            else:
                logger.info("COMMIT")
                executor.commit()

        except Exception:
            if savepoint_name:
                logger.info("ROLLBACK TO SAVEPOINT %s", savepoint_name)
                executor.execute(f"ROLLBACK TO SAVEPOINT {savepoint_name}")
            else:
                logger.info("ROLLBACK")
                executor.rollback()
            raise
        finally:
            transaction_obj._active = False
            self._leave_level()


class Transaction(QueryFactoryMixin):
    """QueryExecutor handle for one nesting level of a TransactionManager."""

    def __init__(self, executor: ConnectionExecutor, manager: TransactionManager, level: int):
        self._executor = executor
        self._manager = manager
        self._level = level
        self._active = True

    @property
    def level(self) -> int:
        return self._level

    def _check_usable(self) -> None:
        """
        Raises:
            TransactionError: If the transaction has ended, or a nested one is open
        """
        if not self._active:
            raise TransactionError("Transaction is no longer active")
        current_level = self._manager.level
        if current_level > self._level:
            raise TransactionError(
                f"Cannot use transaction level {self._level} from level {current_level}. "
                "Higher-level transactions cannot be accessed from nested transactions."
            )

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        self._check_usable()
        return self._executor.execute(sql, params)

    def query(self, sql: str, params: Optional[Sequence[Any]] = None, rows_as_dicts: bool = False) -> list[Any]:
        self._check_usable()
        return self._executor.query(sql, params, rows_as_dicts=rows_as_dicts)


_transaction_managers: dict[str, TransactionManager] = {}


def transaction(connection_name: str = "default"):
    """Open a transaction on the named connection (see clausework.connection.connect)."""
    if connection_name not in _transaction_managers:
        def executor_factory_builder(name):
            return lambda: get_executor(name=name)
        executor_factory = executor_factory_builder(connection_name)
        _transaction_managers[connection_name] = TransactionManager(executor_factory=executor_factory)
    return _transaction_managers[connection_name].transaction()
