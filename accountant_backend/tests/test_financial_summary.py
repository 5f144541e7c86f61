"""
Financial summary tests.

Aggregation over ledger sums and pending invoices, end to end.
"""

import pytest
from decimal import Decimal

from accountant_backend.app.domain.finance.ledger_store import LedgerStore
from accountant_backend.app.domain.finance.summary_service import SummaryService
from accountant_backend.app.models.finance_enums import InvoiceStatus


@pytest.mark.asyncio
async def test_empty_summary_is_all_zero(db_session):
    summary = await SummaryService.get_financial_summary(db_session)

    assert summary.total_income == 0
    assert summary.total_expenses == 0
    assert summary.net_profit == 0
    assert summary.pending_invoices_amount == 0


@pytest.mark.asyncio
async def test_income_and_expense_scenario(db_session):
    await LedgerStore.create(db_session, entry_type="Income", amount=500, created_by="7")
    await LedgerStore.create(db_session, entry_type="Expense", amount=200, created_by="7")

    summary = await SummaryService.get_financial_summary(db_session)

    assert summary.total_income == Decimal("500")
    assert summary.total_expenses == Decimal("200")
    assert summary.net_profit == Decimal("300")
    assert summary.pending_invoices_amount == Decimal("0")


@pytest.mark.asyncio
async def test_net_profit_can_be_negative(db_session):
    await LedgerStore.create(db_session, entry_type="Expense", amount="75.50", created_by="7")

    summary = await SummaryService.get_financial_summary(db_session)

    assert summary.net_profit == Decimal("-75.50")
    assert summary.net_profit == summary.total_income - summary.total_expenses


@pytest.mark.asyncio
async def test_new_invoice_counts_as_pending(db_session, manager):
    await manager.create_invoice(db_session, total_amount=100, order_id="O1")

    summary = await SummaryService.get_financial_summary(db_session)

    assert summary.pending_invoices_amount == Decimal("100")


@pytest.mark.asyncio
async def test_pending_covers_draft_sent_and_overdue_only(db_session, manager):
    draft = await manager.create_invoice(db_session, total_amount=10)
    sent = await manager.create_invoice(db_session, total_amount=20)
    overdue = await manager.create_invoice(db_session, total_amount=40)
    paid = await manager.create_invoice(db_session, total_amount=80)

    await manager.send_invoice(db_session, sent.id)
    overdue.status = InvoiceStatus.OVERDUE
    await db_session.commit()
    await manager.verify_payment(db_session, paid.id, acting_principal="7")

    summary = await SummaryService.get_financial_summary(db_session)

    assert summary.pending_invoices_amount == Decimal("70")
    assert summary.total_income == Decimal("80")
    assert draft.status == InvoiceStatus.DRAFT


@pytest.mark.asyncio
async def test_payment_moves_amount_from_pending_to_income(db_session, manager):
    await LedgerStore.create(db_session, entry_type="Income", amount=250, created_by="7")
    invoice = await manager.create_invoice(db_session, total_amount=1000)

    before = await SummaryService.get_financial_summary(db_session)
    assert before.pending_invoices_amount == Decimal("1000")

    await manager.verify_payment(db_session, invoice.id, acting_principal="7")

    after = await SummaryService.get_financial_summary(db_session)
    assert after.pending_invoices_amount == Decimal("0")
    assert after.total_income == before.total_income + Decimal("1000")
    assert after.net_profit == after.total_income - after.total_expenses
