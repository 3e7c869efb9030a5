from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database.database import get_session
from app.core.dependencies import get_current_user
from app.models.user import UserProfile
from app.models.idea import IdeaSubmissionCreate, IdeaSubmissionPublic
from app.services import idea as idea_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.post("/", response_model=IdeaSubmissionPublic, status_code=201)
def submit_idea(
    idea_in: IdeaSubmissionCreate,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> IdeaSubmissionPublic:
    """
    Submit an idea for a new project.

    Read-only accounts may submit ideas too. A blank category is stored as empty.

    Raises:
        `422 ValidationError`: If the title or description is blank or too long.
    """
    user_id = ensure_id(current_user.id_user, "UserProfile")
    idea = idea_service.submit_idea(session, user_id, idea_in)
    session.commit()
    session.refresh(idea)
    return IdeaSubmissionPublic.model_validate(idea)


@router.get("/me", response_model=list[IdeaSubmissionPublic])
def read_my_ideas(
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> list[IdeaSubmissionPublic]:
    user_id = ensure_id(current_user.id_user, "UserProfile")
    return [
        IdeaSubmissionPublic.model_validate(idea)
        for idea in idea_service.get_user_ideas(session, user_id)
    ]
