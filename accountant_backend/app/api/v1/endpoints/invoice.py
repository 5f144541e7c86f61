"""
Order Invoice API Endpoints.

Generate or fetch the invoice belonging to a specific order.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from accountant_backend.app.db.session import get_db
from accountant_backend.app.core.guards import require_role, ACCOUNTING_ROLES
from accountant_backend.app.domain.finance.invoice_lifecycle import (
    InvoiceLifecycleManager, get_lifecycle_manager
)
from accountant_backend.app.schemas.finance import InvoiceGenerate, InvoiceResponse

router = APIRouter(prefix="/accountant/invoice", tags=["Accountant Invoice"])


@router.post("/{order_id}", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def generate_invoice(
    payload: InvoiceGenerate,
    order_id: str = Path(..., description="ID of the order"),
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db),
    manager: InvoiceLifecycleManager = Depends(get_lifecycle_manager)
):
    """
    Generate an invoice for a specific order.

    404 if the order does not exist, 409 if it is already invoiced.
    """
    return await manager.generate_invoice(
        db,
        order_id=order_id,
        total_amount=payload.total_amount,
        due_date=payload.due_date,
        description=payload.description,
    )


@router.get("/{order_id}", response_model=InvoiceResponse)
async def get_invoice(
    order_id: str = Path(..., description="ID of the order"),
    current_user: dict = Depends(require_role(ACCOUNTING_ROLES)),
    db: AsyncSession = Depends(get_db),
    manager: InvoiceLifecycleManager = Depends(get_lifecycle_manager)
):
    """Get invoice details for a specific order."""
    return await manager.get_invoice(db, order_id)
