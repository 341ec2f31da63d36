"""Row-level lock for serialized read-modify-write of a single record."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import SQLModel, select

logger = structlog.get_logger(__name__)

TModel = TypeVar("TModel", bound=SQLModel)


class RowLockError(Exception):
    """Base lock exception."""


class RowNotFoundError(RowLockError):
    """No record matches the lock predicate."""


class LockNotAcquiredError(RowLockError):
    """Attempted to use lock without acquiring it first."""


@dataclass
class RowLock(Generic[TModel]):
    """Exclusive lock on one database record, held until the transaction commits.

    MUST be used as async context manager:
        async with RowLock(session, NumberingRule, NumberingRule.code == code) as lock:
            await lock.update_record(current_sequence=lock.record.current_sequence + 1)

    On clean exit pending changes are flushed, the savepoint is released and the
    outer transaction is committed, so a concurrent locker blocked on the same row
    reads the new values. On error the savepoint is rolled back.
    """

    session: AsyncSession
    model_class: type[TModel]
    predicate: ColumnElement[bool]
    nowait: bool = False

    record: TModel | None = field(default=None, init=False)
    _tx: AsyncSessionTransaction | None = field(default=None, init=False)
    _acquired: bool = field(default=False, init=False)
    _owns_transaction: bool = field(default=False, init=False)

    @property
    def name(self) -> str:
        return self.model_class.__name__

    def _check_acquired(self) -> None:
        """Raise if lock not properly acquired via async with."""
        if not self._acquired or self.record is None:
            raise LockNotAcquiredError(f"{self.name}: Lock must be used with 'async with RowLock(...) as lock:'")

    async def update_record(self, **fields: object) -> None:
        """Update record fields and flush (keeps transaction open)."""
        self._check_acquired()
        for key, value in fields.items():
            setattr(self.record, key, value)
        await self.session.flush()

    def __enter__(self) -> None:
        """Prevent synchronous `with` usage."""
        raise TypeError(f"{self.__class__.__name__} must be used with 'async with', not 'with'")

    def __exit__(self, *args: object) -> None:
        pass  # Never reached

    async def __aenter__(self) -> "RowLock[TModel]":
        # Savepoint so the lock also works inside a transaction the caller already opened
        self._owns_transaction = not self.session.in_transaction()
        self._tx = await self.session.begin_nested()

        try:
            stmt = (
                select(self.model_class)
                .where(self.predicate)
                .with_for_update(nowait=self.nowait)
                # An earlier unlocked read in this session must not mask the locked row values
                .execution_options(populate_existing=True)
            )
            res = await self.session.execute(stmt)
            self.record = res.scalars().first()

            if self.record is None:
                raise RowNotFoundError(f"{self.name}: no row matches the lock predicate")

            self._acquired = True
            return self

        except BaseException:
            # __aexit__ is NOT called if __aenter__ raises, so cleanup here
            if self._tx is not None:
                await self._rollback()
                self._tx = None
            raise

    async def __aexit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: object) -> None:
        self._acquired = False
        if self._tx is None:
            return
        if exc_type is None:
            await self.session.flush()
            # Release the savepoint and commit the outer transaction to release the row lock
            await self._tx.commit()
            await self.session.commit()
        else:
            logger.debug("Rolling back locked update", model=self.name, error=str(exc))
            await self._rollback()

    async def _rollback(self) -> None:
        """Roll back the savepoint, and the outer transaction if this lock opened it."""
        assert self._tx is not None
        await self._tx.rollback()
        if self._owns_transaction:
            # Ends the transaction so the row (or SQLite write) lock is released right away
            await self.session.rollback()
