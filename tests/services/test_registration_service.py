"""Tests for organisation registration and its review."""

from datetime import date
import pytest
from sqlmodel import Session, select

from app.models.enums import (
    UserType,
    VerificationStatus,
    AccessLevel,
    ProcessingStatus,
    OrganisationType,
)
from app.models.registration import (
    BusinessPartnerRegistrationCreate,
    CareFacilityRegistrationCreate,
    CareFacilityDocument,
    DocumentUpload,
)
from app.models.user import UserProfile
from app.services import registration as registration_service
from app.exceptions import AlreadyExistsError, ValidationError, InvalidStateError

PASSWORD = "Password123"
DOCUMENTS = [
    DocumentUpload(file_name="krs_extract.PDF", file_size=2048, file_url="s3://docs/1"),
    DocumentUpload(file_name="statute", file_size=100),
]


def _business_partner_in(**overrides) -> BusinessPartnerRegistrationCreate:
    data = {
        "company_name": "Green Grocer Ltd",
        "date_of_establishment": date(2015, 3, 1),
        "business_profile": "Local grocery",
        "address": "Main Street 1, Warsaw",
        "nip": "1234567890",
        "contact_person": "Ewa Green",
        "phone": "+48 600 000 000",
        "email": "Office@GreenGrocer.pl",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "documents": DOCUMENTS[:1],
    }
    data.update(overrides)
    return BusinessPartnerRegistrationCreate(**data)


def _care_facility_in(**overrides) -> CareFacilityRegistrationCreate:
    data = {
        "organisation_type": OrganisationType.CARE_FACILITY,
        "name": "Sunrise Care Home",
        "date_of_establishment": date(2001, 9, 1),
        "business_profile": "Residential care",
        "address": "Lipowa 3, Krakow",
        "krs": "0000123456",
        "email": "contact@sunrise.pl",
        "password": PASSWORD,
        "confirm_password": PASSWORD,
        "documents": DOCUMENTS,
    }
    data.update(overrides)
    return CareFacilityRegistrationCreate(**data)


def _profile_count(session: Session) -> int:
    return len(session.exec(select(UserProfile)).all())


class TestRegisterBusinessPartner:
    def test_register_creates_profile_and_pending_registration(self, session: Session):
        registration = registration_service.register_business_partner(
            session, _business_partner_in()
        )

        assert registration.status == ProcessingStatus.PENDING
        profile = session.get(UserProfile, registration.id_user)
        assert profile is not None
        assert profile.user_type == UserType.BUSINESS_PARTNER
        assert profile.email == "office@greengrocer.pl"
        assert profile.full_name == "Green Grocer Ltd"
        assert profile.location == "Main Street 1, Warsaw"
        assert profile.bio == "Local grocery"
        assert profile.verification_status == VerificationStatus.IN_VERIFICATION
        assert profile.access_level == AccessLevel.READ_ONLY

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"confirm_password": "Password124"}, "confirm_password"),
            ({"password": "short", "confirm_password": "short"}, "password"),
            ({"documents": []}, "documents"),
        ],
    )
    def test_invalid_input_writes_nothing(self, session: Session, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            registration_service.register_business_partner(
                session, _business_partner_in(**overrides)
            )

        assert exc_info.value.field == field
        assert _profile_count(session) == 0

    def test_duplicate_email(self, session: Session, partner):
        with pytest.raises(AlreadyExistsError):
            registration_service.register_business_partner(
                session, _business_partner_in(email=partner.email)
            )


class TestRegisterCareFacility:
    def test_register_stores_documents(self, session: Session):
        registration = registration_service.register_care_facility(
            session, _care_facility_in()
        )

        documents = registration_service.get_care_facility_documents(
            session, registration.id_registration
        )
        assert [d.document_type for d in documents] == ["pdf", "document"]
        assert documents[0].file_size == 2048

        profile = session.get(UserProfile, registration.id_user)
        assert profile.user_type == UserType.CARE_FACILITY_NGO
        assert profile.hashed_password is not None
        assert PASSWORD not in registration.model_dump().values()

    def test_missing_organisation_type_is_checked_first(self, session: Session):
        with pytest.raises(ValidationError) as exc_info:
            registration_service.register_care_facility(
                session,
                _care_facility_in(organisation_type=None, confirm_password="other"),
            )
        assert exc_info.value.field == "organisation_type"

    @pytest.mark.parametrize(
        "organisation_type",
        [OrganisationType.NGO_ORGANISATION, OrganisationType.CARE_FACILITY],
    )
    def test_krs_required(self, session: Session, organisation_type):
        with pytest.raises(ValidationError) as exc_info:
            registration_service.register_care_facility(
                session,
                _care_facility_in(organisation_type=organisation_type, krs="  "),
            )
        assert exc_info.value.field == "krs"
        assert session.exec(select(CareFacilityDocument)).all() == []

    def test_krs_optional_for_schools(self, session: Session):
        registration = registration_service.register_care_facility(
            session, _care_facility_in(organisation_type=OrganisationType.SCHOOL, krs=None)
        )
        assert registration.krs is None

    def test_documents_required(self, session: Session):
        with pytest.raises(ValidationError) as exc_info:
            registration_service.register_care_facility(
                session, _care_facility_in(documents=[])
            )
        assert exc_info.value.field == "documents"


class TestRequiredDocuments:
    @pytest.mark.parametrize(
        "organisation_type, expected, krs",
        [
            (
                OrganisationType.NGO_ORGANISATION,
                "KRS certificate, establishment decision, operating license",
                True,
            ),
            (OrganisationType.TEACHER, "Agreement with school, teaching certificate", False),
            (OrganisationType.SCHOOL, "School registration, operating license", False),
            (OrganisationType.OTHER, "Relevant registration documents", False),
            (None, "Required documents", False),
        ],
    )
    def test_hint_per_type(self, organisation_type, expected, krs):
        hint = registration_service.required_documents(organisation_type)
        assert hint.required_documents == expected
        assert hint.krs_required is krs


class TestReview:
    def test_approve_verifies_account(self, session: Session):
        registration = registration_service.register_business_partner(
            session, _business_partner_in()
        )

        reviewed = registration_service.approve_registration(
            session, UserType.BUSINESS_PARTNER, registration.id_registration
        )

        assert reviewed.status == ProcessingStatus.APPROVED
        profile = session.get(UserProfile, registration.id_user)
        assert profile.verification_status == VerificationStatus.VERIFIED
        assert profile.access_level == AccessLevel.FULL_ACCESS

    def test_reject_marks_account_rejected(self, session: Session):
        registration = registration_service.register_care_facility(
            session, _care_facility_in()
        )

        registration_service.reject_registration(
            session, UserType.CARE_FACILITY_NGO, registration.id_registration
        )

        profile = session.get(UserProfile, registration.id_user)
        assert profile.verification_status == VerificationStatus.REJECTED
        assert profile.access_level == AccessLevel.READ_ONLY

    def test_reviewed_registration_cannot_be_reviewed_again(self, session: Session):
        registration = registration_service.register_business_partner(
            session, _business_partner_in()
        )
        registration_service.reject_registration(
            session, UserType.BUSINESS_PARTNER, registration.id_registration
        )

        with pytest.raises(InvalidStateError):
            registration_service.approve_registration(
                session, UserType.BUSINESS_PARTNER, registration.id_registration
            )

    def test_volunteers_have_no_registration(self, session: Session):
        with pytest.raises(ValidationError):
            registration_service.get_registrations(session, UserType.VOLUNTEER)

    def test_list_by_status(self, session: Session):
        first = registration_service.register_business_partner(
            session, _business_partner_in()
        )
        registration_service.register_business_partner(
            session, _business_partner_in(email="second@example.com")
        )
        registration_service.approve_registration(
            session, UserType.BUSINESS_PARTNER, first.id_registration
        )

        pending = registration_service.get_registrations(
            session, UserType.BUSINESS_PARTNER, status=ProcessingStatus.PENDING
        )

        assert [r.email for r in pending] == ["second@example.com"]
