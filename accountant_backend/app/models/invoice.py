"""
Invoice database model.

Billing document for an order, moving Draft -> Sent -> Paid.
"""

from sqlalchemy import Column, String, DateTime, Enum, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from accountant_backend.app.db.session import Base
from accountant_backend.app.models.finance_enums import InvoiceStatus, enum_values
from accountant_backend.app.models.ledger_entry import new_id, utcnow


class Invoice(Base):
    """
    Invoice model.

    Lifecycle timestamps are written by the transition that sets them:
    sent_at by send, paid_at by payment verification.
    """
    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True, default=new_id)

    order_id = Column(String(64), ForeignKey('orders.id'), nullable=False, index=True)
    # Eager so async callers can serialize the owning order without lazy IO
    order = relationship("Order", lazy="selectin")

    # Financials
    total_amount = Column(Numeric(18, 2), nullable=False)

    # Status
    status = Column(
        Enum(InvoiceStatus, name="invoice_status", values_callable=enum_values),
        default=InvoiceStatus.DRAFT,
        nullable=False,
        index=True,
    )

    description = Column(String(255), nullable=True)
    pdf_url = Column(String(255), nullable=True)

    # Lifecycle timestamps
    invoice_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    sent_at = Column(DateTime(timezone=True), nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Invoice(id={self.id}, status='{self.status.value}', amount={self.total_amount})>"
