"""
Finance Schemas for the accountant API.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from accountant_backend.app.models.finance_enums import FinancialLogType, InvoiceStatus, OrderStatus


class FinancialLogCreate(BaseModel):
    """Schema for recording an income or expense entry."""
    # Amount stays loosely typed; the ledger store owns amount validation
    entry_type: str = Field(..., description="Income or Expense")
    amount: Decimal | str
    description: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    reference: Optional[str] = Field(None, max_length=64)


class FinancialLogResponse(BaseModel):
    """Schema for displaying a financial log entry."""
    id: str
    entry_type: FinancialLogType
    amount: Decimal
    description: Optional[str]
    category: Optional[str]
    reference: Optional[str]
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True


class InvoiceCreate(BaseModel):
    """Schema for creating a manual invoice (and its order)."""
    total_amount: Optional[Decimal | str] = None
    order_id: Optional[str] = Field(None, min_length=1, max_length=64)
    user_id: Optional[str] = Field(None, max_length=64)
    due_date: Optional[datetime] = None
    description: Optional[str] = Field(None, max_length=255)


class InvoiceGenerate(BaseModel):
    """Schema for invoicing an existing order."""
    total_amount: Optional[Decimal | str] = None
    due_date: Optional[datetime] = None
    description: Optional[str] = Field(None, max_length=255)


class OrderSummary(BaseModel):
    """Owning order, embedded in invoice responses."""
    id: str
    status: OrderStatus
    order_date: datetime
    user_id: Optional[str]

    class Config:
        from_attributes = True


class InvoiceResponse(BaseModel):
    """Schema for displaying an invoice."""
    id: str
    order_id: str
    order: Optional[OrderSummary] = None
    total_amount: Decimal
    status: InvoiceStatus
    description: Optional[str]
    pdf_url: Optional[str]
    invoice_date: datetime
    due_date: Optional[datetime]
    sent_at: Optional[datetime]
    paid_at: Optional[datetime]

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str


class FinancialSummary(BaseModel):
    """Dashboard totals. Every field defaults to 0, never null."""
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    pending_invoices_amount: Decimal = Decimal("0")
