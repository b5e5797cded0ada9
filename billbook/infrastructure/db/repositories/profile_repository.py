import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.domain.models.documents import BankDetails, BusinessProfile
from billbook.infrastructure.db.models import BusinessProfileRecord
from billbook.infrastructure.db.repositories.base import StoreResult

logger = logging.getLogger("repositories.profiles")


class ProfileRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def to_profile(record: BusinessProfileRecord) -> BusinessProfile:
        return BusinessProfile(
            owner_id=record.owner_id,
            legal_name=record.legal_name or "",
            email=record.email or "",
            phone=record.phone or "",
            address=record.address or "",
            registration_state=record.registration_state or "",
            tax_id=record.tax_id or None,
            pan_number=record.pan_number or "",
            bank_details=BankDetails(
                bank_name=record.bank_name or "",
                account_number=record.account_number or "",
                ifsc_code=record.ifsc_code or "",
            ),
            invoice_prefix=record.invoice_prefix,
        )

    async def get(self, owner_id: str) -> StoreResult[BusinessProfile]:
        try:
            result = await self.db.execute(
                select(BusinessProfileRecord).where(BusinessProfileRecord.owner_id == owner_id)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Profile load failed for %s: %s", owner_id, exc)
            await self.db.rollback()
            return StoreResult.fail("Failed to load profile")
        if record is None:
            return StoreResult.not_found("Profile")
        return StoreResult.ok(self.to_profile(record))

    async def save(self, profile: BusinessProfile) -> StoreResult[BusinessProfile]:
        """Insert or overwrite the owner's profile."""
        try:
            record = await self.db.get(BusinessProfileRecord, profile.owner_id)
            if record is None:
                record = BusinessProfileRecord(owner_id=profile.owner_id)
                self.db.add(record)

            bank = profile.bank_details
            record.legal_name = profile.legal_name
            record.email = profile.email
            record.phone = profile.phone
            record.address = profile.address
            record.registration_state = profile.registration_state
            record.tax_id = profile.tax_id
            record.pan_number = profile.pan_number
            record.bank_name = bank.bank_name
            record.account_number = bank.account_number
            record.ifsc_code = bank.ifsc_code
            record.invoice_prefix = profile.invoice_prefix

            await self.db.commit()
        except SQLAlchemyError as exc:
            logger.error("Profile save failed for %s: %s", profile.owner_id, exc)
            await self.db.rollback()
            return StoreResult.fail("Failed to save profile")
        return StoreResult.ok(profile)
