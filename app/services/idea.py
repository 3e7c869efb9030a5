from sqlmodel import Session, select

from app.models.idea import IdeaSubmission, IdeaSubmissionCreate
from app.models.enums import ProcessingStatus
from app.utils.logger import logger
from app.utils.validation import require_text


def submit_idea(
    session: Session, user_id: int, idea_in: IdeaSubmissionCreate
) -> IdeaSubmission:
    """
    Store an idea proposed by a user; it waits for review with status `pending`.

    A blank category is stored as null.

    Raises:
        ValidationError: If the title or description is blank.
    """
    category = (idea_in.category or "").strip() or None
    idea = IdeaSubmission(
        id_user=user_id,
        title=require_text(idea_in.title, "title", "Title"),
        description=require_text(idea_in.description, "description", "Description"),
        category=category,
        status=ProcessingStatus.PENDING,
    )
    session.add(idea)
    session.flush()
    session.refresh(idea)
    logger.info(f"Idea {idea.id_idea} submitted by profile {user_id}")
    return idea


def get_user_ideas(session: Session, user_id: int) -> list[IdeaSubmission]:
    """Ideas submitted by a user, newest first."""
    statement = (
        select(IdeaSubmission)
        .where(IdeaSubmission.id_user == user_id)
        .order_by(
            IdeaSubmission.created_at.desc(),  # type: ignore[attr-defined]
            IdeaSubmission.id_idea.desc(),  # type: ignore[union-attr]
        )
    )
    return list(session.exec(statement).all())
