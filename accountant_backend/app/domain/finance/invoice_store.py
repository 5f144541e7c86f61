"""
Invoice Store.

Lookups and aggregates over invoices and their backing orders.
Writes live in the lifecycle manager so they can share a transaction.
"""

from decimal import Decimal
from typing import List

from sqlalchemy import Select, select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from accountant_backend.app.core.exceptions import NotFoundError
from accountant_backend.app.models.invoice import Invoice
from accountant_backend.app.models.order import Order
from accountant_backend.app.models.finance_enums import PENDING_INVOICE_STATUSES


class InvoiceStore:

    @staticmethod
    async def get(db: AsyncSession, invoice_id: str) -> Invoice:
        invoice = await db.get(Invoice, invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice", invoice_id)
        return invoice

    @staticmethod
    def lock_query(invoice_id: str) -> Select:
        # populate_existing so a copy already in the session is refreshed once the lock is held
        return (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )

    @staticmethod
    async def get_for_update(db: AsyncSession, invoice_id: str) -> Invoice:
        """Load an invoice holding its row lock until the transaction ends."""
        result = await db.execute(InvoiceStore.lock_query(invoice_id))
        invoice = result.scalars().first()
        if invoice is None:
            raise NotFoundError("Invoice", invoice_id)
        return invoice

    @staticmethod
    async def find_by_order(db: AsyncSession, order_id: str) -> Invoice | None:
        # Oldest first, in case an order was invoiced more than once
        result = await db.execute(
            select(Invoice)
            .where(Invoice.order_id == order_id)
            .order_by(Invoice.invoice_date)
            .limit(1)
        )
        return result.scalars().first()

    @staticmethod
    async def get_by_order(db: AsyncSession, order_id: str) -> Invoice:
        invoice = await InvoiceStore.find_by_order(db, order_id)
        if invoice is None:
            raise NotFoundError("Invoice for order", order_id)
        return invoice

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> Order:
        order = await db.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    @staticmethod
    async def order_exists(db: AsyncSession, order_id: str) -> bool:
        result = await db.execute(select(Order.id).where(Order.id == order_id))
        return result.first() is not None

    @staticmethod
    async def list_all(db: AsyncSession) -> List[Invoice]:
        """All invoices, most recent invoice_date first."""
        result = await db.execute(select(Invoice).order_by(desc(Invoice.invoice_date)))
        return list(result.scalars().all())

    @staticmethod
    async def sum_pending(db: AsyncSession) -> Decimal:
        """Total still owed on Draft, Sent and Overdue invoices (0 when none)."""
        query = select(func.coalesce(func.sum(Invoice.total_amount), 0)).where(
            Invoice.status.in_(PENDING_INVOICE_STATUSES)
        )
        total = (await db.execute(query)).scalar()
        return Decimal(str(total)) if total is not None else Decimal("0")
