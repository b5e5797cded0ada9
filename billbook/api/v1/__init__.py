# billbook/api/v1/__init__.py
"""
Versioned API v1, aggregating all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from billbook.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from billbook.api.v1.routes.analytics import router as analytics_router
from billbook.api.v1.routes.auth import router as auth_router
from billbook.api.v1.routes.invoices import router as invoices_router
from billbook.api.v1.routes.profile import router as profile_router
from billbook.api.v1.routes.purchase_bills import router as purchase_bills_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(auth_router)
v1_router.include_router(profile_router)
v1_router.include_router(invoices_router)
v1_router.include_router(purchase_bills_router)
v1_router.include_router(analytics_router)
