from typing import Optional
from sqlalchemy.orm import Session
from app.crud.business import business as business_crud
from app.crud.program import program as program_crud
from app.models.business import Business
from app.models.program import Program
from app.schemas.voice_context import VoiceBusinessContext, BusinessContext
from app.utils.phone import phone_number_candidates

# Profile fields a program can override on top of its business
INHERITED_FIELDS = ("vertical", "address", "hours", "services", "staff", "faqs", "promos")


class BusinessNotFound(Exception):
    """No business answers the dialled number."""

    def __init__(self, to_number: str):
        super().__init__(f"Business not found for phone number {to_number}")
        self.to_number = to_number


class VoiceContextService:
    """
    Answers the voice agent's "who am I answering for?" lookups.
    """

    def get_context_by_number(self, db: Session, to_number: str) -> VoiceBusinessContext:
        """
        Exact-match lookup of the business answering `to_number`.

        Raises:
            BusinessNotFound: If no business owns the number
        """
        business = business_crud.get_by_phone(db, to_number)
        if business is None:
            raise BusinessNotFound(to_number)

        return VoiceBusinessContext(
            id=business.id,
            name=business.name or None,
            vertical=business.vertical or None,
            address=business.address or None,
            hours=business.hours or None,
            services=business.services or None,
            insurances=None,  # insurances are only tracked per program
            staff=business.staff or None,
            faqs=business.faqs or None,
            promos=business.promos or None,
            to_number=business.to_number or None,
        )

    def find_business(self, db: Session, to_number: str) -> Optional[Business]:
        """Try each dialable format of the number until one matches."""
        for candidate in phone_number_candidates(to_number):
            business = business_crud.get_by_phone(db, candidate)
            if business is not None:
                return business
        return None

    def find_program(
        self,
        db: Session,
        business_id: str,
        extension: Optional[str] = None,
        program_id: Optional[str] = None
    ) -> Optional[Program]:
        """A program id wins over an extension; neither means no program."""
        if program_id:
            return program_crud.get(db, id=program_id, business_id=business_id)
        if extension:
            return program_crud.get_by_extension(db, business_id, extension)
        return None

    def build_context(self, business: Business, program: Optional[Program]) -> BusinessContext:
        context = BusinessContext(
            business_id=business.id,
            business_name=(program.name if program else None) or business.name or None,
            business_phone=business.to_number or None,
            insurances=(program.insurances if program else None) or None,
        )
        for field in INHERITED_FIELDS:
            value = (getattr(program, field) if program else None) or getattr(business, field) or None
            setattr(context, field, value)

        if program is not None:
            context.program_id = program.id
            context.program_name = program.name
            context.extension = program.extension
            if program.description:
                context.program_description = program.description
            if program.settings:
                context.program_settings = program.settings

        return context

    def get_business_context(
        self,
        db: Session,
        to_number: str,
        extension: Optional[str] = None,
        program_id: Optional[str] = None
    ) -> BusinessContext:
        """
        Full context for an inbound call, merged with the program reached
        through `extension` or `program_id` when one is given.

        Raises:
            BusinessNotFound: If no business matches any format of the number
        """
        business = self.find_business(db, to_number)
        if business is None:
            raise BusinessNotFound(to_number)

        program = self.find_program(db, business.id, extension=extension, program_id=program_id)
        return self.build_context(business, program)


# Create a singleton instance
voice_context_service = VoiceContextService()
