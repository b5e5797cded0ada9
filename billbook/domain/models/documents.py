from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DocumentKind(str, Enum):
    INVOICE = "invoice"
    PURCHASE_BILL = "purchase_bill"

    @property
    def counterparty_role(self) -> str:
        return "customer" if self is DocumentKind.INVOICE else "vendor"

    @property
    def number_label(self) -> str:
        return "Invoice Number" if self is DocumentKind.INVOICE else "Bill Number"

    @property
    def title(self) -> str:
        return "TAX INVOICE" if self is DocumentKind.INVOICE else "PURCHASE BILL"


class DocumentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    OVERDUE = "overdue"


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    description: str = ""
    tax_code: str = Field(default="", description="HSN/SAC code")
    quantity: int = Field(default=1, ge=0)
    unit_rate: Decimal = Field(default=Decimal("0"), ge=0)

    @computed_field  # type: ignore[misc]
    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_rate


class GSTBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_inter_state: bool
    igst: Decimal = Field(default=Decimal("0"))
    cgst: Decimal = Field(default=Decimal("0"))
    sgst: Decimal = Field(default=Decimal("0"))
    total: Decimal = Field(default=Decimal("0"))


class Counterparty(BaseModel):
    """Customer (on invoices) or vendor (on purchase bills)."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: str = ""
    state: str
    gstin: str = ""
    pan: str = ""


class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    kind: DocumentKind
    document_number: str
    counterparty: Counterparty
    seller_state: str = ""
    issue_date: date
    items: tuple[LineItem, ...]
    subtotal: Decimal
    gst_breakdown: GSTBreakdown
    total: Decimal
    status: DocumentStatus = DocumentStatus.UNPAID
    created_at: datetime


class BankDetails(BaseModel):
    bank_name: str = ""
    account_number: str = ""
    ifsc_code: str = ""


class BusinessProfile(BaseModel):
    owner_id: str
    legal_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    registration_state: str = ""
    tax_id: Optional[str] = None
    pan_number: str = ""
    bank_details: BankDetails = Field(default_factory=BankDetails)
    invoice_prefix: str = "XUSE"
