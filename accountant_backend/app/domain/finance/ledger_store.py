"""
Ledger Store (Domain Logic).

Creates, deletes and aggregates immutable financial log entries.
Entries are never amended: the only writes are insert and hard delete.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from accountant_backend.app.core.exceptions import ValidationError, NotFoundError
from accountant_backend.app.core.observability import logger
from accountant_backend.app.db.session import atomic
from accountant_backend.app.models.ledger_entry import LedgerEntry
from accountant_backend.app.models.finance_enums import FinancialLogType

ZERO = Decimal("0")
CENT = Decimal("0.01")
# Numeric(18, 2) holds at most 16 integer digits
MAX_AMOUNT = Decimal("1e16")


def parse_amount(value: Any, field: str = "amount") -> Decimal:
    """
    Parse a monetary amount into a finite, non-negative Decimal.

    Accepts Decimal, int, float or numeric strings ("12.50"). The result is
    quantized to cents so it matches what the Numeric(18, 2) column stores.

    Raises:
        ValidationError: missing, unparseable, non-finite, negative,
            finer than a cent or too large to store
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required", field=field)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a decimal number", field=field)
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a decimal number", field=field)
    if amount < ZERO:
        raise ValidationError(f"{field} must not be negative", field=field)
    if amount >= MAX_AMOUNT:
        raise ValidationError(f"{field} must be less than {MAX_AMOUNT:f}", field=field)
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field} must not have more than 2 decimal places", field=field)
    return amount.quantize(CENT)


def parse_entry_type(value: Any) -> FinancialLogType:
    if isinstance(value, FinancialLogType):
        return value
    try:
        return FinancialLogType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in FinancialLogType)
        raise ValidationError(f"type must be one of: {allowed}", field="type")


def require_principal(created_by: Any) -> str:
    if created_by is None or not str(created_by).strip():
        raise ValidationError("createdBy is required", field="created_by")
    return str(created_by)


class LedgerStore:

    @staticmethod
    async def add_entry(
        db: AsyncSession,
        *,
        entry_type: Any,
        amount: Any,
        created_by: Any,
        description: Optional[str] = None,
        category: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> LedgerEntry:
        """
        Validate and stage a new entry in the caller's transaction.

        Flushes so the id and created_at are populated, but does not commit;
        composite operations commit it together with their other writes.
        """
        entry = LedgerEntry(
            entry_type=parse_entry_type(entry_type),
            amount=parse_amount(amount),
            created_by=require_principal(created_by),
            description=description,
            category=category,
            reference=reference,
        )
        db.add(entry)
        await db.flush()
        return entry

    @staticmethod
    async def create(db: AsyncSession, **fields) -> LedgerEntry:
        """
        Persist a new financial log entry.

        Args:
            db: Database session
            **fields: entry_type, amount, created_by and optional
                description, category, reference

        Returns:
            Created LedgerEntry

        Raises:
            ValidationError: bad amount, unknown type or missing created_by
            PersistenceError: the insert failed (nothing persisted)
        """
        async with atomic(db, "create_financial_log"):
            entry = await LedgerStore.add_entry(db, **fields)

        logger.info(
            "Financial log created",
            extra={"entry_id": entry.id, "entry_type": entry.entry_type.value, "created_by": entry.created_by}
        )
        return entry

    @staticmethod
    async def get(db: AsyncSession, entry_id: str) -> LedgerEntry:
        entry = await db.get(LedgerEntry, entry_id)
        if entry is None:
            raise NotFoundError("Financial log", entry_id)
        return entry

    @staticmethod
    async def delete(db: AsyncSession, entry_id: str) -> None:
        """Hard-delete an entry. Raises NotFoundError if it does not exist."""
        async with atomic(db, "delete_financial_log"):
            entry = await LedgerStore.get(db, entry_id)
            await db.delete(entry)

        logger.info("Financial log deleted", extra={"entry_id": entry_id})

    @staticmethod
    async def list_all(
        db: AsyncSession,
        entry_type: Optional[FinancialLogType] = None
    ) -> List[LedgerEntry]:
        """All entries, most recent first. Each call reads a fresh snapshot."""
        query = select(LedgerEntry).order_by(desc(LedgerEntry.created_at))
        if entry_type is not None:
            query = query.where(LedgerEntry.entry_type == parse_entry_type(entry_type))

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def sum_by_type(db: AsyncSession, entry_type: Any) -> Decimal:
        """
        Sum of amounts over entries of one type.

        An empty set sums to 0, never None.
        """
        query = select(func.coalesce(func.sum(LedgerEntry.amount), 0)).where(
            LedgerEntry.entry_type == parse_entry_type(entry_type)
        )
        total = (await db.execute(query)).scalar()
        return Decimal(str(total)) if total is not None else ZERO
