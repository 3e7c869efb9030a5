"""Organisation sign-up models: business partners and care facilities / NGOs."""

from datetime import date, datetime
from sqlmodel import SQLModel, Field
from .enums import ProcessingStatus, OrganisationType


class DocumentUpload(SQLModel):
    """Metadata of an uploaded supporting document; the file itself lives elsewhere."""

    file_name: str = Field(min_length=1, max_length=255)
    file_size: int = Field(default=0, ge=0)
    file_url: str = Field(default="")


# Business partner


class BusinessPartnerRegistrationBase(SQLModel):
    company_name: str = Field(max_length=200)
    date_of_establishment: date
    business_profile: str = Field(max_length=2000)
    address: str = Field(max_length=255)
    nip: str = Field(max_length=20)
    contact_person: str = Field(max_length=120)
    phone: str = Field(max_length=50)
    email: str = Field(max_length=255)


class BusinessPartnerRegistration(BusinessPartnerRegistrationBase, table=True):
    __tablename__ = "business_partner_registrations"

    id_registration: int | None = Field(default=None, primary_key=True)
    id_user: int = Field(foreign_key="user_profiles.id_user", index=True)
    status: ProcessingStatus = Field(default=ProcessingStatus.PENDING)
    created_at: datetime = Field(default_factory=datetime.now)


class BusinessPartnerRegistrationCreate(BusinessPartnerRegistrationBase):
    password: str
    confirm_password: str
    documents: list[DocumentUpload] = Field(default_factory=list)


class BusinessPartnerRegistrationPublic(BusinessPartnerRegistrationBase):
    id_registration: int
    id_user: int
    status: ProcessingStatus
    created_at: datetime


# Care facility / NGO


class CareFacilityRegistrationBase(SQLModel):
    organisation_type: OrganisationType
    name: str = Field(max_length=200)
    date_of_establishment: date
    business_profile: str = Field(max_length=2000)
    detailed_description: str = Field(default="", max_length=5000)
    address: str = Field(max_length=255)
    secondary_address: str | None = Field(default=None, max_length=255)
    krs: str | None = Field(default=None, max_length=20)
    email: str = Field(max_length=255)


class CareFacilityRegistration(CareFacilityRegistrationBase, table=True):
    __tablename__ = "care_facility_registrations"

    id_registration: int | None = Field(default=None, primary_key=True)
    id_user: int = Field(foreign_key="user_profiles.id_user", index=True)
    status: ProcessingStatus = Field(default=ProcessingStatus.PENDING)
    created_at: datetime = Field(default_factory=datetime.now)


class CareFacilityRegistrationCreate(SQLModel):
    # Optional here so a missing type is reported like the other form errors
    organisation_type: OrganisationType | None = None
    name: str = Field(max_length=200)
    date_of_establishment: date
    business_profile: str = Field(max_length=2000)
    detailed_description: str = Field(default="", max_length=5000)
    address: str = Field(max_length=255)
    secondary_address: str | None = Field(default=None, max_length=255)
    krs: str | None = Field(default=None, max_length=20)
    email: str = Field(max_length=255)
    password: str
    confirm_password: str
    documents: list[DocumentUpload] = Field(default_factory=list)


class CareFacilityDocument(SQLModel, table=True):
    __tablename__ = "care_facility_documents"

    id_document: int | None = Field(default=None, primary_key=True)
    id_registration: int = Field(
        foreign_key="care_facility_registrations.id_registration", index=True
    )
    document_type: str = Field(max_length=20)
    file_name: str = Field(max_length=255)
    file_url: str = Field(default="")
    file_size: int = Field(default=0, ge=0)
    uploaded_at: datetime = Field(default_factory=datetime.now)


class CareFacilityDocumentPublic(SQLModel):
    id_document: int
    document_type: str
    file_name: str
    file_url: str
    file_size: int
    uploaded_at: datetime


class CareFacilityRegistrationPublic(CareFacilityRegistrationBase):
    id_registration: int
    id_user: int
    status: ProcessingStatus
    created_at: datetime
    documents: list[CareFacilityDocumentPublic] = []


class RequiredDocuments(SQLModel):
    organisation_type: OrganisationType | None
    required_documents: str
    krs_required: bool
