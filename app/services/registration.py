"""Registration service module: sign-up of business partners and care facilities / NGOs."""

import os

from sqlmodel import Session, select

from app.core.password import get_password_hash
from app.models.registration import (
    BusinessPartnerRegistration,
    BusinessPartnerRegistrationCreate,
    CareFacilityRegistration,
    CareFacilityRegistrationCreate,
    CareFacilityRegistrationPublic,
    CareFacilityDocument,
    CareFacilityDocumentPublic,
    DocumentUpload,
    RequiredDocuments,
)
from app.models.user import UserProfile
from app.models.enums import (
    UserType,
    VerificationStatus,
    AccessLevel,
    ProcessingStatus,
    OrganisationType,
)
from app.exceptions import NotFoundError, ValidationError, InvalidStateError
from app.services import profile as profile_service
from app.utils.logger import logger
from app.utils.validation import ensure_id, require_text, mask_email

REQUIRED_DOCUMENTS = {
    OrganisationType.NGO_ORGANISATION: "KRS certificate, establishment decision, operating license",
    OrganisationType.CARE_FACILITY: "KRS certificate, establishment decision, operating license",
    OrganisationType.TEACHER: "Agreement with school, teaching certificate",
    OrganisationType.SCHOOL: "School registration, operating license",
    OrganisationType.OTHER: "Relevant registration documents",
}
DEFAULT_REQUIRED_DOCUMENTS = "Required documents"

KRS_REQUIRED_TYPES = {OrganisationType.NGO_ORGANISATION, OrganisationType.CARE_FACILITY}

RegistrationModel = type[BusinessPartnerRegistration] | type[CareFacilityRegistration]
REGISTRATION_MODELS: dict[UserType, RegistrationModel] = {
    UserType.BUSINESS_PARTNER: BusinessPartnerRegistration,
    UserType.CARE_FACILITY_NGO: CareFacilityRegistration,
}


def required_documents(organisation_type: OrganisationType | None) -> RequiredDocuments:
    """Documents an organisation of the given type has to upload, and whether it needs a KRS number."""
    return RequiredDocuments(
        organisation_type=organisation_type,
        required_documents=REQUIRED_DOCUMENTS.get(
            organisation_type, DEFAULT_REQUIRED_DOCUMENTS
        ),
        krs_required=organisation_type in KRS_REQUIRED_TYPES,
    )


def document_type(file_name: str) -> str:
    """File extension of an uploaded document, lowercased; "document" when it has none."""
    extension = os.path.splitext(file_name)[1].lstrip(".").lower()
    return extension or "document"


def _require_documents(documents: list[DocumentUpload]) -> None:
    if not documents:
        raise ValidationError("At least one document is required", field="documents")


def _new_organisation_profile(
    session: Session,
    *,
    user_type: UserType,
    full_name: str,
    email: str,
    password: str,
    location: str,
    bio: str,
) -> UserProfile:
    return profile_service.add_profile(
        session,
        UserProfile(
            full_name=full_name,
            email=email.strip().lower(),
            location=location,
            bio=bio,
            user_type=user_type,
            verification_status=VerificationStatus.IN_VERIFICATION,
            access_level=AccessLevel.READ_ONLY,
            points=0,
            hashed_password=get_password_hash(password),
        ),
    )


def register_business_partner(
    session: Session, registration_in: BusinessPartnerRegistrationCreate
) -> BusinessPartnerRegistration:
    """
    Sign up a business partner.

    Every field is checked before anything is written. The account starts in verification with
    read-only access; the registration row waits for an administrator's review. Both rows are
    flushed in the caller's transaction.

    Parameters:
        session: Database session.
        registration_in: Company details, credentials and supporting documents.

    Returns:
        BusinessPartnerRegistration: The pending registration.

    Raises:
        ValidationError: If the company name or e-mail is blank, the passwords differ or are too
            short, or no document was attached.
        AlreadyExistsError: If the e-mail is already used by another account.
    """
    company_name = require_text(registration_in.company_name, "company_name", "Company name")
    email = require_text(registration_in.email, "email", "Email")
    profile_service.validate_password(
        registration_in.password, registration_in.confirm_password
    )
    _require_documents(registration_in.documents)

    profile = _new_organisation_profile(
        session,
        user_type=UserType.BUSINESS_PARTNER,
        full_name=company_name,
        email=email,
        password=registration_in.password,
        location=registration_in.address.strip(),
        bio=registration_in.business_profile.strip(),
    )

    registration = BusinessPartnerRegistration.model_validate(
        registration_in,
        update={
            "company_name": company_name,
            "email": profile.email,
            "id_user": ensure_id(profile.id_user, "UserProfile"),
            "status": ProcessingStatus.PENDING,
        },
    )
    session.add(registration)
    session.flush()
    session.refresh(registration)

    logger.info(
        f"Business partner registration {registration.id_registration} received "
        f"({mask_email(profile.email)}, {len(registration_in.documents)} documents)"
    )
    return registration


def register_care_facility(
    session: Session, registration_in: CareFacilityRegistrationCreate
) -> CareFacilityRegistration:
    """
    Sign up a care facility, NGO, school or teacher.

    Checks run in this order: organisation type, passwords, KRS number, documents. The password
    is only stored hashed on the profile, never on the registration.

    Returns:
        CareFacilityRegistration: The pending registration, with one document row per upload.

    Raises:
        ValidationError: If the organisation type is missing, the passwords differ or are too
            short, the KRS number is missing for an NGO or care facility, or no document was
            attached.
        AlreadyExistsError: If the e-mail is already used by another account.
    """
    organisation_type = registration_in.organisation_type
    if organisation_type is None:
        raise ValidationError(
            "Organisation type is required", field="organisation_type"
        )
    profile_service.validate_password(
        registration_in.password, registration_in.confirm_password
    )
    krs = (registration_in.krs or "").strip() or None
    if organisation_type in KRS_REQUIRED_TYPES and not krs:
        raise ValidationError(
            "KRS number is required for this organisation type", field="krs"
        )
    _require_documents(registration_in.documents)

    name = require_text(registration_in.name, "name", "Name")
    email = require_text(registration_in.email, "email", "Email")

    profile = _new_organisation_profile(
        session,
        user_type=UserType.CARE_FACILITY_NGO,
        full_name=name,
        email=email,
        password=registration_in.password,
        location=registration_in.address.strip(),
        bio=registration_in.business_profile.strip(),
    )

    registration = CareFacilityRegistration.model_validate(
        registration_in,
        update={
            "organisation_type": organisation_type,
            "name": name,
            "email": profile.email,
            "krs": krs,
            "id_user": ensure_id(profile.id_user, "UserProfile"),
            "status": ProcessingStatus.PENDING,
        },
    )
    session.add(registration)
    session.flush()
    registration_id = ensure_id(registration.id_registration, "CareFacilityRegistration")

    for upload in registration_in.documents:
        session.add(
            CareFacilityDocument(
                id_registration=registration_id,
                document_type=document_type(upload.file_name),
                file_name=upload.file_name,
                file_url=upload.file_url,
                file_size=upload.file_size,
            )
        )
    session.flush()
    session.refresh(registration)

    logger.info(
        f"{organisation_type.value} registration {registration_id} received "
        f"({mask_email(profile.email)}, {len(registration_in.documents)} documents)"
    )
    return registration


def get_care_facility_documents(
    session: Session, registration_id: int
) -> list[CareFacilityDocument]:
    statement = (
        select(CareFacilityDocument)
        .where(CareFacilityDocument.id_registration == registration_id)
        .order_by(CareFacilityDocument.id_document)  # type: ignore[arg-type]
    )
    return list(session.exec(statement).all())


def to_care_facility_public(
    session: Session, registration: CareFacilityRegistration
) -> CareFacilityRegistrationPublic:
    registration_id = ensure_id(registration.id_registration, "CareFacilityRegistration")
    return CareFacilityRegistrationPublic(
        **registration.model_dump(),
        documents=[
            CareFacilityDocumentPublic.model_validate(document)
            for document in get_care_facility_documents(session, registration_id)
        ],
    )


def get_registrations(
    session: Session,
    user_type: UserType,
    *,
    status: ProcessingStatus | None = None,
) -> list[BusinessPartnerRegistration] | list[CareFacilityRegistration]:
    """List registrations of one kind, oldest first, optionally filtered by status."""
    model = _registration_model(user_type)
    statement = select(model)
    if status is not None:
        statement = statement.where(model.status == status)
    statement = statement.order_by(model.created_at, model.id_registration)  # type: ignore[arg-type]
    return list(session.exec(statement).all())  # type: ignore[return-value]


def _registration_model(user_type: UserType) -> RegistrationModel:
    try:
        return REGISTRATION_MODELS[user_type]
    except KeyError:
        raise ValidationError(
            f"{user_type.value} accounts have no registration", field="user_type"
        )


def _review_registration(
    session: Session,
    user_type: UserType,
    registration_id: int,
    outcome: ProcessingStatus,
) -> BusinessPartnerRegistration | CareFacilityRegistration:
    model = _registration_model(user_type)
    registration = session.get(model, registration_id)
    if not registration:
        raise NotFoundError(model.__name__, registration_id)
    if registration.status != ProcessingStatus.PENDING:
        action = "approve" if outcome == ProcessingStatus.APPROVED else "reject"
        raise InvalidStateError("Registration", action, registration.status.value)

    registration.status = outcome
    session.add(registration)
    profile_service.set_verification_status(
        session,
        registration.id_user,
        VerificationStatus.VERIFIED
        if outcome == ProcessingStatus.APPROVED
        else VerificationStatus.REJECTED,
    )
    session.flush()
    session.refresh(registration)
    logger.info(f"{model.__name__} {registration_id} {outcome.value}")
    return registration


def approve_registration(
    session: Session, user_type: UserType, registration_id: int
) -> BusinessPartnerRegistration | CareFacilityRegistration:
    """
    Approve a pending registration: the account becomes verified with full access.

    Raises:
        NotFoundError: If the registration does not exist.
        ValidationError: If it was already reviewed.
    """
    return _review_registration(
        session, user_type, registration_id, ProcessingStatus.APPROVED
    )


def reject_registration(
    session: Session, user_type: UserType, registration_id: int
) -> BusinessPartnerRegistration | CareFacilityRegistration:
    """
    Reject a pending registration: the account is marked rejected and stays read-only.

    Raises:
        NotFoundError: If the registration does not exist.
        ValidationError: If it was already reviewed.
    """
    return _review_registration(
        session, user_type, registration_id, ProcessingStatus.REJECTED
    )
