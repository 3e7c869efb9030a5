"""
Database models.

Importing this package registers every table on SQLModel.metadata, which
create_db_and_tables() and the Alembic environment rely on.
"""

from app.models.admin import Admin
from app.models.user import UserProfile
from app.models.relation import VolunteerPartnerRelation
from app.models.activity import UserActivity
from app.models.favorite import Favorite
from app.models.opportunity import Opportunity, Event, AssignedOpportunity
from app.models.registration import (
    BusinessPartnerRegistration,
    CareFacilityRegistration,
    CareFacilityDocument,
)
from app.models.idea import IdeaSubmission
from app.models.organisation import (
    OrganisationApplication,
    OrganisationVolunteer,
    OrganisationActivity,
)

__all__ = [
    "Admin",
    "UserProfile",
    "VolunteerPartnerRelation",
    "UserActivity",
    "Favorite",
    "Opportunity",
    "Event",
    "AssignedOpportunity",
    "BusinessPartnerRegistration",
    "CareFacilityRegistration",
    "CareFacilityDocument",
    "IdeaSubmission",
    "OrganisationApplication",
    "OrganisationVolunteer",
    "OrganisationActivity",
]
