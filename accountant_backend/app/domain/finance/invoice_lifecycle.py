"""
Invoice Lifecycle Manager (Domain Logic).

Drives invoices Draft -> Sent -> Paid and applies each transition's side
effects. Multi-row writes are transactional:

- create_invoice / generate_invoice: Order + Invoice
- verify_payment: Invoice status + Income ledger entry

Either every write of a transition is committed or none is.
"""

from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from accountant_backend.app.core.config import settings
from accountant_backend.app.core.exceptions import ConflictError
from accountant_backend.app.core.observability import logger
from accountant_backend.app.db.session import atomic
from accountant_backend.app.domain.finance.invoice_store import InvoiceStore
from accountant_backend.app.domain.finance.ledger_store import (
    LedgerStore, parse_amount, require_principal
)
from accountant_backend.app.models.finance_enums import (
    FinancialLogType, InvoiceStatus, OrderStatus
)
from accountant_backend.app.models.invoice import Invoice
from accountant_backend.app.models.ledger_entry import utcnow
from accountant_backend.app.models.order import Order

PAYMENT_CATEGORY = "Invoice Payment"

# Source statuses accepted for each target when transitions are enforced.
# Paid appears in no source set: it is terminal.
ALLOWED_SOURCES: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]] = {
    InvoiceStatus.SENT: frozenset({InvoiceStatus.DRAFT, InvoiceStatus.OVERDUE}),
    InvoiceStatus.PAID: frozenset({InvoiceStatus.SENT, InvoiceStatus.OVERDUE}),
}


def build_pdf_url(order_id: str, base_url: Optional[str] = None) -> str:
    base = (base_url or settings.invoice_pdf_base_url).rstrip("/")
    return f"{base}/manual_invoice_{order_id}.pdf"


class InvoiceLifecycleManager:
    """
    Invoice state machine.

    With enforce_transitions=False (the default) send and verify accept an
    invoice in any status, matching the legacy behaviour. With True, illegal
    transitions raise ConflictError.
    """

    def __init__(self, enforce_transitions: bool = False, pdf_base_url: Optional[str] = None):
        self.enforce_transitions = enforce_transitions
        self.pdf_base_url = pdf_base_url

    def check_transition(self, invoice: Invoice, target: InvoiceStatus) -> None:
        if not self.enforce_transitions:
            return
        if invoice.status not in ALLOWED_SOURCES.get(target, frozenset()):
            raise ConflictError(
                f"Invoice {invoice.id} cannot move from {invoice.status.value} to {target.value}",
                details={"invoice_id": invoice.id, "status": invoice.status.value, "target": target.value}
            )

    async def _insert_invoice(
        self,
        db: AsyncSession,
        order: Order,
        total_amount,
        due_date: Optional[datetime],
        description: Optional[str],
    ) -> Invoice:
        invoice = Invoice(
            order_id=order.id,
            order=order,
            invoice_date=utcnow(),
            total_amount=total_amount,
            pdf_url=build_pdf_url(order.id, self.pdf_base_url),
            status=InvoiceStatus.DRAFT,
            due_date=due_date,
            description=description,
        )
        db.add(invoice)
        await db.flush()
        return invoice

    async def create_invoice(
        self,
        db: AsyncSession,
        total_amount: Any,
        order_id: Optional[str] = None,
        user_id: Optional[str] = None,
        due_date: Optional[datetime] = None,
        description: Optional[str] = None,
    ) -> Invoice:
        """
        Create a manual invoice together with its backing order.

        Args:
            db: Database session
            total_amount: Amount owed (non-negative decimal)
            order_id: Id for the new order; generated when omitted
            user_id: Customer being billed
            due_date: Optional payment deadline
            description: Free text shown on the invoice

        Returns:
            The Draft invoice

        Raises:
            ValidationError: total_amount missing or negative
            ConflictError: order_id already exists
            PersistenceError: either insert failed (neither is kept)
        """
        amount = parse_amount(total_amount, field="total_amount")

        async with atomic(db, "create_invoice"):
            if order_id is not None and await InvoiceStore.order_exists(db, order_id):
                raise ConflictError(f"Order {order_id} already exists", details={"order_id": order_id})

            order = Order(
                user_id=user_id,
                status=OrderStatus.COMPLETED,
                order_date=utcnow(),
            )
            if order_id is not None:
                order.id = order_id
            db.add(order)
            await db.flush()  # To get order.id

            invoice = await self._insert_invoice(db, order, amount, due_date, description)

        logger.info(
            "Invoice created",
            extra={"invoice_id": invoice.id, "order_id": invoice.order_id, "total_amount": str(amount)}
        )
        return invoice

    async def generate_invoice(
        self,
        db: AsyncSession,
        order_id: str,
        total_amount: Any,
        due_date: Optional[datetime] = None,
        description: Optional[str] = None,
    ) -> Invoice:
        """
        Issue the invoice for an existing order.

        An order gets at most one invoice through this path.

        Raises:
            ValidationError: bad total_amount
            NotFoundError: order does not exist
            ConflictError: order already invoiced
        """
        amount = parse_amount(total_amount, field="total_amount")

        async with atomic(db, "generate_invoice"):
            order = await InvoiceStore.get_order(db, order_id)
            if await InvoiceStore.find_by_order(db, order_id) is not None:
                raise ConflictError(
                    f"Order {order_id} already has an invoice", details={"order_id": order_id}
                )
            invoice = await self._insert_invoice(db, order, amount, due_date, description)

        logger.info("Invoice generated", extra={"invoice_id": invoice.id, "order_id": order_id})
        return invoice

    async def send_invoice(self, db: AsyncSession, invoice_id: str) -> Invoice:
        """Mark an invoice Sent and stamp sent_at."""
        async with atomic(db, "send_invoice"):
            invoice = await InvoiceStore.get_for_update(db, invoice_id)
            self.check_transition(invoice, InvoiceStatus.SENT)
            invoice.status = InvoiceStatus.SENT
            invoice.sent_at = utcnow()
            await db.flush()

        logger.info("Invoice sent", extra={"invoice_id": invoice_id})
        return invoice

    async def verify_payment(self, db: AsyncSession, invoice_id: str, acting_principal: Any) -> Invoice:
        """
        Mark an invoice Paid and record the matching Income entry.

        Both writes share one transaction: a failure in either leaves the
        invoice status and the ledger exactly as they were.

        Args:
            db: Database session
            invoice_id: Invoice being paid
            acting_principal: User verifying the payment (ledger created_by)

        Returns:
            The Paid invoice

        Raises:
            ValidationError: acting_principal missing
            NotFoundError: invoice does not exist
            ConflictError: transition refused (enforced mode only)
            PersistenceError: a write failed and was rolled back
        """
        created_by = require_principal(acting_principal)

        async with atomic(db, "verify_payment"):
            invoice = await InvoiceStore.get_for_update(db, invoice_id)
            self.check_transition(invoice, InvoiceStatus.PAID)

            invoice.status = InvoiceStatus.PAID
            invoice.paid_at = utcnow()
            await db.flush()

            await LedgerStore.add_entry(
                db,
                entry_type=FinancialLogType.INCOME,
                amount=invoice.total_amount,
                description=f"Payment for invoice {invoice.id}",
                category=PAYMENT_CATEGORY,
                reference=invoice.id,
                created_by=created_by,
            )

        logger.info(
            "Payment verified",
            extra={"invoice_id": invoice_id, "amount": str(invoice.total_amount), "created_by": created_by}
        )
        return invoice

    async def get_all_invoices(self, db: AsyncSession) -> List[Invoice]:
        return await InvoiceStore.list_all(db)

    async def get_invoice(self, db: AsyncSession, order_id: str) -> Invoice:
        """Invoice issued for an order. Raises NotFoundError when there is none."""
        return await InvoiceStore.get_by_order(db, order_id)

    async def get_invoice_by_id(self, db: AsyncSession, invoice_id: str) -> Invoice:
        return await InvoiceStore.get(db, invoice_id)


def get_lifecycle_manager() -> InvoiceLifecycleManager:
    """FastAPI dependency: manager configured from settings."""
    return InvoiceLifecycleManager(enforce_transitions=settings.enforce_invoice_transitions)
