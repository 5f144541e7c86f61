"""
Accountant API Endpoints.

Financial logs, invoice lifecycle and the dashboard summary.
Thin adapter over the finance domain services; domain errors are mapped to
status codes by the global exception handlers.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from accountant_backend.app.db.session import get_db
from accountant_backend.app.core.guards import require_role, ACCOUNTING_ROLES
from accountant_backend.app.domain.finance.ledger_store import LedgerStore
from accountant_backend.app.domain.finance.invoice_lifecycle import (
    InvoiceLifecycleManager, get_lifecycle_manager
)
from accountant_backend.app.domain.finance.summary_service import SummaryService
from accountant_backend.app.schemas.finance import (
    FinancialLogCreate, FinancialLogResponse, FinancialSummary,
    InvoiceCreate, InvoiceResponse, MessageResponse
)

router = APIRouter(prefix="/accountant", tags=["Accountant"])


@router.get("/summary", response_model=FinancialSummary)
async def get_financial_summary(
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Income, expenses, net profit and pending invoice amount."""
    return await SummaryService.get_financial_summary(db)


# --- Financial Logs ---

@router.get("/financial-logs", response_model=List[FinancialLogResponse])
async def list_financial_logs(
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """List all financial logs, newest first."""
    return await LedgerStore.list_all(db)


@router.post("/financial-logs", response_model=FinancialLogResponse, status_code=status.HTTP_201_CREATED)
async def create_financial_log(
    log: FinancialLogCreate,
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Record an income or expense attributed to the caller."""
    return await LedgerStore.create(
        db,
        entry_type=log.entry_type,
        amount=log.amount,
        description=log.description,
        category=log.category,
        reference=log.reference,
        created_by=current_user["user_id"],
    )


@router.delete("/financial-logs/{log_id}", response_model=MessageResponse)
async def delete_financial_log(
    log_id: str = Path(..., description="Financial log ID"),
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    await LedgerStore.delete(db, log_id)
    return MessageResponse(message="Financial log deleted successfully")


# --- Invoices ---

@router.get("/invoices", response_model=List[InvoiceResponse])
async def list_invoices(
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db),
    manager: InvoiceLifecycleManager = Depends(get_lifecycle_manager)
):
    """List all invoices, most recent first."""
    return await manager.get_all_invoices(db)


@router.post("/invoices", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceCreate,
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db),
    manager: InvoiceLifecycleManager = Depends(get_lifecycle_manager)
):
    """
    Create a manual invoice.

    A Completed order is created alongside it in the same transaction.
    """
    return await manager.create_invoice(
        db,
        total_amount=payload.total_amount,
        order_id=payload.order_id,
        user_id=payload.user_id,
        due_date=payload.due_date,
        description=payload.description,
    )


@router.post("/invoices/{invoice_id}/send", response_model=InvoiceResponse)
async def send_invoice(
    invoice_id: str = Path(..., description="Invoice ID"),
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db),
    manager: InvoiceLifecycleManager = Depends(get_lifecycle_manager)
):
    return await manager.send_invoice(db, invoice_id)


@router.post("/invoices/{invoice_id}/verify-payment", response_model=InvoiceResponse)
async def verify_payment(
    invoice_id: str = Path(..., description="Invoice ID"),
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db),
    manager: InvoiceLifecycleManager = Depends(get_lifecycle_manager)
):
    """
    Mark an invoice Paid.

    Records the matching Income entry, attributed to the caller, atomically.
    """
    return await manager.verify_payment(db, invoice_id, acting_principal=current_user["user_id"])
