"""SQLAlchemy-backed store for committed transactions.

The store is constructed explicitly and handed to the pipeline; nothing here is
a process-wide singleton.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import create_engine, delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sms_categorizer.domain.categories import Category, Icon
from sms_categorizer.logger import get_logger
from sms_categorizer.models import Transaction
from sms_categorizer.storage.tables import Base, TransactionRow

logger = get_logger(__name__)


def _engine_for(url: str) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)
    connect_args = {"check_same_thread": False}
    if url in {"sqlite://", "sqlite:///:memory:"}:
        # A single shared connection, otherwise every thread gets its own empty DB.
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, connect_args=connect_args)


def _normalize_timestamp(value: datetime) -> datetime:
    """Store naive UTC so equality checks do not depend on the caller's tzinfo."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _to_model(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.id,
        description=row.description,
        category=Category(row.category),
        amount=row.amount,
        icon=Icon(row.icon),
        occurred_at=row.occurred_at,
    )


class TransactionStore:
    def __init__(self, database_url: str, engine: Engine | None = None):
        self.database_url = database_url
        self.engine = engine or _engine_for(database_url)
        self._session_maker: sessionmaker[Session] = sessionmaker(
            bind=self.engine, expire_on_commit=False, class_=Session
        )

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def close(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self._session_maker()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def count_matching(self, description: str, occurred_at: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(TransactionRow)
            .where(TransactionRow.description == description)
            .where(TransactionRow.occurred_at == _normalize_timestamp(occurred_at))
        )
        with self.session_scope() as session:
            return int(session.execute(stmt).scalar_one())

    def insert(self, transaction: Transaction) -> Transaction | None:
        """
        Insert unless a row with the same description and timestamp exists.

        Returns the stored transaction with its id, or None on conflict.
        """
        row = TransactionRow(
            description=transaction.description,
            category=transaction.category.value,
            amount=transaction.amount,
            icon=transaction.icon.value,
            occurred_at=_normalize_timestamp(transaction.occurred_at),
        )
        try:
            with self.session_scope() as session:
                session.add(row)
                session.flush()
                stored = _to_model(row)
        except IntegrityError:
            logger.info(
                "[STORE] Duplicate '%s' at %s rejected by unique constraint.",
                transaction.description,
                transaction.occurred_at.isoformat(),
            )
            return None
        logger.debug("[STORE] Inserted transaction %s.", stored.id)
        return stored

    def list_recent(self, limit: int | None = None) -> list[Transaction]:
        stmt = select(TransactionRow).order_by(
            TransactionRow.occurred_at.desc(), TransactionRow.id.desc()
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        with self.session_scope() as session:
            return [_to_model(row) for row in session.scalars(stmt)]

    def get(self, transaction_id: int) -> Transaction | None:
        with self.session_scope() as session:
            row = session.get(TransactionRow, transaction_id)
            return _to_model(row) if row is not None else None

    def delete(self, transaction_id: int) -> bool:
        with self.session_scope() as session:
            result = session.execute(
                delete(TransactionRow).where(TransactionRow.id == transaction_id)
            )
            deleted = result.rowcount or 0
        logger.info("[STORE] Delete transaction %s: %s row(s).", transaction_id, deleted)
        return deleted > 0

    def delete_all(self) -> int:
        with self.session_scope() as session:
            result = session.execute(delete(TransactionRow))
            deleted = result.rowcount or 0
        logger.info("[STORE] Deleted all transactions (%s row(s)).", deleted)
        return deleted
