"""Statistics panel of care facilities / NGOs."""

from sqlmodel import Session, select, func

from app.core.config import get_settings
from app.models.organisation import (
    OrganisationApplication,
    OrganisationVolunteer,
    OrganisationActivity,
    OrganisationActivityCreate,
    OrganisationStatistics,
)
from app.models.enums import ApplicationStatus, MembershipStatus
from app.utils.logger import logger


def get_statistics(session: Session, organisation_id: int) -> OrganisationStatistics:
    """
    Count an organisation's applications per status and its volunteers.

    Returns:
        OrganisationStatistics: Application counts, volunteer counts and the share of active
            volunteers (0 when the organisation has none).
    """
    application_rows = session.exec(
        select(OrganisationApplication.status, func.count())
        .where(OrganisationApplication.id_organisation == organisation_id)
        .group_by(OrganisationApplication.status)
    ).all()
    applications = {status: count for status, count in application_rows}

    volunteer_rows = session.exec(
        select(OrganisationVolunteer.status, func.count())
        .where(OrganisationVolunteer.id_organisation == organisation_id)
        .group_by(OrganisationVolunteer.status)
    ).all()
    volunteers = {status: count for status, count in volunteer_rows}

    total_volunteers = sum(volunteers.values())
    active_volunteers = volunteers.get(MembershipStatus.ACTIVE, 0)

    return OrganisationStatistics(
        total_applications=sum(applications.values()),
        in_application=applications.get(ApplicationStatus.IN_APPLICATION, 0),
        in_progress=applications.get(ApplicationStatus.IN_PROGRESS, 0),
        completed=applications.get(ApplicationStatus.COMPLETED, 0),
        total_volunteers=total_volunteers,
        active_volunteers=active_volunteers,
        active_volunteer_ratio=(
            active_volunteers / total_volunteers if total_volunteers else 0.0
        ),
    )


def get_recent_activities(
    session: Session, organisation_id: int
) -> list[OrganisationActivity]:
    """Latest entries of an organisation's activity log, newest first."""
    statement = (
        select(OrganisationActivity)
        .where(OrganisationActivity.id_organisation == organisation_id)
        .order_by(
            OrganisationActivity.created_at.desc(),  # type: ignore[attr-defined]
            OrganisationActivity.id_activity.desc(),  # type: ignore[union-attr]
        )
        .limit(get_settings().RECENT_ACTIVITY_LIMIT)
    )
    return list(session.exec(statement).all())


def log_activity(
    session: Session, organisation_id: int, activity_in: OrganisationActivityCreate
) -> OrganisationActivity:
    activity = OrganisationActivity.model_validate(
        activity_in, update={"id_organisation": organisation_id}
    )
    session.add(activity)
    session.flush()
    session.refresh(activity)
    logger.debug(
        f"Organisation {organisation_id} logged '{activity.activity_type}' activity"
    )
    return activity
