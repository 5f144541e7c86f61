"""
Finance enumerations for the ledger and invoicing.
"""

import enum


class FinancialLogType(str, enum.Enum):
    """Ledger entry type enumeration."""
    INCOME = "Income"  # Money received
    EXPENSE = "Expense"  # Money spent


class InvoiceStatus(str, enum.Enum):
    """Invoice status enumeration."""
    DRAFT = "Draft"  # Created, not yet delivered to the customer
    SENT = "Sent"  # Delivered, awaiting payment
    PAID = "Paid"  # Payment verified (terminal)
    OVERDUE = "Overdue"  # Past due date, set by an external sweep


class OrderStatus(str, enum.Enum):
    """Order status enumeration."""
    PENDING = "Pending"
    COMPLETED = "Completed"


# Invoices whose amount is still owed
PENDING_INVOICE_STATUSES = (
    InvoiceStatus.SENT,
    InvoiceStatus.OVERDUE,
    InvoiceStatus.DRAFT,
)


def enum_values(enum_cls):
    """Persist enum values ("Income") rather than member names ("INCOME")."""
    return [member.value for member in enum_cls]
