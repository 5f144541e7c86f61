"""
Financial Summary Service.

Dashboard aggregation over the ledger and open invoices.
Focused on READ-ONLY operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from accountant_backend.app.domain.finance.invoice_store import InvoiceStore
from accountant_backend.app.domain.finance.ledger_store import LedgerStore
from accountant_backend.app.models.finance_enums import FinancialLogType
from accountant_backend.app.schemas.finance import FinancialSummary


class SummaryService:

    @staticmethod
    async def get_financial_summary(db: AsyncSession) -> FinancialSummary:
        """Income, expenses, net profit and pending invoice total; each 0 when empty."""
        total_income = await LedgerStore.sum_by_type(db, FinancialLogType.INCOME)
        total_expenses = await LedgerStore.sum_by_type(db, FinancialLogType.EXPENSE)
        pending = await InvoiceStore.sum_pending(db)

        return FinancialSummary(
            total_income=total_income,
            total_expenses=total_expenses,
            net_profit=total_income - total_expenses,
            pending_invoices_amount=pending,
        )
