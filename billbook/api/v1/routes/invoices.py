# billbook/api/v1/routes/invoices.py
"""Sales invoice endpoints."""

from billbook.api.v1.routes.documents import make_document_router
from billbook.domain.models.documents import DocumentKind

router = make_document_router(DocumentKind.INVOICE, "/invoices", "Invoices")
