"""Unit-of-work coordination for async SQLAlchemy sessions."""
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from .database import Database
from .interfaces import Transactor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Transaction:
    """Explicit handle for one open unit of work.

    Repository methods receive this handle and run their statements on
    :attr:`session`. The handle is only valid while :attr:`is_active` is true.
    """

    def __init__(self, session: AsyncSession):
        self._session = session
        self._active = True

    @property
    def session(self) -> AsyncSession:
        if not self._active:
            raise RuntimeError("Transaction is no longer active")
        return self._session

    @property
    def is_active(self) -> bool:
        return self._active

    def close(self) -> None:
        self._active = False


class SQLAlchemyTransactor(Transactor):
    """Runs work inside a database transaction.

    Commits when the work returns and rolls back when it raises, including on
    task cancellation. Passing an active :class:`Transaction` makes the call
    join it instead of opening a second one.
    """

    def __init__(self, database: Database):
        """Initialize the transactor.

        Args:
            database: Database providing sessions
        """
        self._database = database

    async def run(
        self,
        work: Callable[[Transaction], Awaitable[T]],
        tx: Optional[Transaction] = None,
    ) -> T:
        """Execute ``work`` atomically.

        Args:
            work: Coroutine function receiving the transaction handle
            tx: Already-open transaction to reuse

        Returns:
            Whatever ``work`` returns
        """
        if tx is not None and tx.is_active:
            return await work(tx)

        async with self._database.session() as session:
            transaction = Transaction(session)
            try:
                await session.begin()
                logger.debug("Transaction started")
                result = await work(transaction)
                await session.commit()
                logger.debug("Transaction committed")
                return result
            except BaseException as e:
                await session.rollback()
                logger.debug(f"Transaction rolled back due to: {type(e).__name__}")
                raise
            finally:
                transaction.close()
