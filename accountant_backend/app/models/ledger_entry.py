"""
Ledger Entry database model.

Immutable income/expense records (financial logs).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Enum, Numeric
from accountant_backend.app.db.session import Base
from accountant_backend.app.models.finance_enums import FinancialLogType, enum_values


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class LedgerEntry(Base):
    """
    Ledger Entry model.

    Immutable record of a single income or expense event.
    Entries are only created or hard-deleted, never updated.
    """
    __tablename__ = "ledger_entries"

    id = Column(String(36), primary_key=True, default=new_id)

    # Entry details
    entry_type = Column(
        Enum(FinancialLogType, name="financial_log_type", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(18, 2), nullable=False)
    description = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)

    # Back-reference to the causal entity (e.g. invoice id for payments)
    reference = Column(String(64), nullable=True, index=True)

    # Acting principal; every entry must be attributable
    created_by = Column(String(64), nullable=False)

    # Timestamps (Immutable - no updated_at)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<LedgerEntry(id={self.id}, type='{self.entry_type.value}', amount={self.amount})>"
