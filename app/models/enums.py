from enum import Enum


class UserType(str, Enum):
    VOLUNTEER = "volunteer"
    BUSINESS_PARTNER = "business_partner"
    CARE_FACILITY_NGO = "care_facility_ngo"


class VerificationStatus(str, Enum):
    NOT_VERIFIED = "not_verified"
    IN_VERIFICATION = "in_verification"
    VERIFIED = "verified"
    REJECTED = "rejected"


class AccessLevel(str, Enum):
    READ_ONLY = "read_only"
    FULL_ACCESS = "full_access"


class RelationStatus(str, Enum):
    PENDING = "pending"
    INVITED = "invited"
    ACTIVE = "active"
    RELEASED = "released"


class InvitationType(str, Enum):
    PARTNER_INVITE = "partner_invite"
    VOLUNTEER_REQUEST = "volunteer_request"


class FavoriteItemType(str, Enum):
    URGENT_NEED = "urgent_need"
    EVENT = "event"


class ProcessingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OrganisationType(str, Enum):
    NGO_ORGANISATION = "ngo_organisation"
    CARE_FACILITY = "care_facility"
    TEACHER = "teacher"
    SCHOOL = "school"
    OTHER = "other"


class ApplicationStatus(str, Enum):
    IN_APPLICATION = "in_application"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MembershipStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AssignmentStatus(str, Enum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
