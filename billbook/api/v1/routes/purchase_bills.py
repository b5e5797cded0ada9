# billbook/api/v1/routes/purchase_bills.py
"""Purchase bill endpoints. Same surface as invoices; vendor address is optional."""

from billbook.api.v1.routes.documents import make_document_router
from billbook.domain.models.documents import DocumentKind

router = make_document_router(DocumentKind.PURCHASE_BILL, "/purchase-bills", "Purchase Bills")
