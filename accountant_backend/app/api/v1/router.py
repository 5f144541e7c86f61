"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from accountant_backend.app.api.v1.endpoints import accountant, invoice

router = APIRouter()

# Financial logs, invoices and summary
router.include_router(accountant.router)

# Per-order invoice generation and lookup
router.include_router(invoice.router)
