"""Registration router: sign-up of organisations awaiting verification."""

from typing import Annotated
from anyio import to_thread

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database.database import get_session
from app.models.enums import OrganisationType
from app.models.registration import (
    BusinessPartnerRegistrationCreate,
    BusinessPartnerRegistrationPublic,
    CareFacilityRegistrationCreate,
    CareFacilityRegistrationPublic,
    RequiredDocuments,
)
from app.services import registration as registration_service

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.post(
    "/business-partners",
    response_model=BusinessPartnerRegistrationPublic,
    status_code=201,
)
async def register_business_partner(
    registration_in: BusinessPartnerRegistrationCreate,
    session: Annotated[Session, Depends(get_session)],
) -> BusinessPartnerRegistrationPublic:
    """
    Register a business partner.

    Creates the partner's account and its registration in a single transaction. The account
    can log in right away but stays read-only until an administrator approves the registration.

    ### Validation:
    - `password` and `confirm_password` must match
    - the password must be at least 8 characters long
    - at least one document must be attached

    Args:
        `registration_in`: Company details (name, date of establishment, business profile,
            address, NIP, contact person, phone, e-mail), credentials and document metadata.

    Returns:
        `BusinessPartnerRegistrationPublic`: The registration, with status `pending`.

    Raises:
        `409 AlreadyExistsError`: If the e-mail is already used.
        `422 ValidationError`: If a check fails; `field` names the offending input.
    """
    registration = registration_service.register_business_partner(
        session, registration_in
    )
    await to_thread.run_sync(session.commit)
    session.refresh(registration)
    return BusinessPartnerRegistrationPublic.model_validate(registration)


@router.post(
    "/care-facilities",
    response_model=CareFacilityRegistrationPublic,
    status_code=201,
)
async def register_care_facility(
    registration_in: CareFacilityRegistrationCreate,
    session: Annotated[Session, Depends(get_session)],
) -> CareFacilityRegistrationPublic:
    """
    Register a care facility, NGO, school or teacher.

    Creates the account, the registration and one document record per attached file in a
    single transaction. The password is only kept as a hash on the account.

    ### Validation (in this order):
    - `organisation_type` is required
    - `password` and `confirm_password` must match and be at least 8 characters long
    - `krs` is required for `ngo_organisation` and `care_facility`
    - at least one document must be attached

    Raises:
        `409 AlreadyExistsError`: If the e-mail is already used.
        `422 ValidationError`: If a check fails; `field` names the offending input.
    """
    registration = registration_service.register_care_facility(session, registration_in)
    await to_thread.run_sync(session.commit)
    session.refresh(registration)
    return registration_service.to_care_facility_public(session, registration)


@router.get("/required-documents", response_model=RequiredDocuments)
def read_required_documents(
    organisation_type: Annotated[OrganisationType | None, Query()] = None,
) -> RequiredDocuments:
    """Documents to attach for an organisation type, and whether a KRS number is needed."""
    return registration_service.required_documents(organisation_type)
