import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Numeric, String, Text, text
from sqlalchemy.orm import relationship

from billbook.infrastructure.db.base import Base


def _uuid_str() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserAccount(Base):
    __tablename__ = "user_accounts"
    id = Column(String(36), primary_key=True, default=_uuid_str)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=text("CURRENT_TIMESTAMP"))
    profile = relationship("BusinessProfileRecord", back_populates="owner", uselist=False)


class BusinessProfileRecord(Base):
    __tablename__ = "business_profiles"
    owner_id = Column(String(36), ForeignKey("user_accounts.id"), primary_key=True)
    legal_name = Column(String(255), default="")
    email = Column(String(255), default="")
    phone = Column(String(20), default="")
    address = Column(Text, default="")
    registration_state = Column(String(64), default="")
    tax_id = Column(String(15), nullable=True)
    pan_number = Column(String(10), default="")
    bank_name = Column(String(255), default="")
    account_number = Column(String(34), default="")
    ifsc_code = Column(String(11), default="")
    invoice_prefix = Column(String(6), default="XUSE", nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
    owner = relationship("UserAccount", back_populates="profile")


class DocumentRecord(Base):
    """Invoices and purchase bills share one table, told apart by ``kind``."""

    __tablename__ = "documents"
    id = Column(String(36), primary_key=True, default=_uuid_str)
    owner_id = Column(String(36), ForeignKey("user_accounts.id"), index=True, nullable=False)
    kind = Column(String(20), index=True, nullable=False)
    document_number = Column(String(32), nullable=False)

    counterparty_name = Column(String(255), nullable=False)
    counterparty_address = Column(Text, default="")
    counterparty_state = Column(String(64), nullable=False)
    counterparty_gstin = Column(String(15), default="")
    counterparty_pan = Column(String(10), default="")
    seller_state = Column(String(64), default="")

    issue_date = Column(Date, nullable=False)
    items = Column(JSON, nullable=False)
    gst_breakdown = Column(JSON, nullable=False)
    subtotal = Column(Numeric(18, 4), nullable=False)
    total = Column(Numeric(18, 4), nullable=False)
    status = Column(String(10), default="unpaid", nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
