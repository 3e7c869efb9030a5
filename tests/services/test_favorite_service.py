"""Tests for favorite service operations."""

from datetime import date
import pytest
from sqlmodel import Session

from app.models.enums import FavoriteItemType
from app.models.opportunity import Opportunity, Event
from app.services import favorite as favorite_service
from app.exceptions import NotFoundError, AlreadyExistsError

URGENT_NEED = FavoriteItemType.URGENT_NEED
EVENT = FavoriteItemType.EVENT


@pytest.fixture(name="opportunity")
def opportunity_fixture(session: Session) -> Opportunity:
    opportunity = Opportunity(title="Blood drive helpers", location="Warsaw")
    session.add(opportunity)
    session.commit()
    session.refresh(opportunity)
    return opportunity


@pytest.fixture(name="event")
def event_fixture(session: Session) -> Event:
    event = Event(title="Charity run", location="Gdansk", event_date=date(2026, 5, 17))
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


class TestAddRemove:
    def test_add_and_check(self, session: Session, volunteer, opportunity):
        favorite_service.add_favorite(
            session, volunteer.id_user, URGENT_NEED, opportunity.id_opportunity
        )

        assert favorite_service.is_favorite(
            session, volunteer.id_user, URGENT_NEED, opportunity.id_opportunity
        )
        # Same id, other item type
        assert not favorite_service.is_favorite(
            session, volunteer.id_user, EVENT, opportunity.id_opportunity
        )

    def test_add_twice(self, session: Session, volunteer, opportunity):
        favorite_service.add_favorite(
            session, volunteer.id_user, URGENT_NEED, opportunity.id_opportunity
        )
        with pytest.raises(AlreadyExistsError):
            favorite_service.add_favorite(
                session, volunteer.id_user, URGENT_NEED, opportunity.id_opportunity
            )

    def test_add_unknown_item(self, session: Session, volunteer):
        with pytest.raises(NotFoundError):
            favorite_service.add_favorite(session, volunteer.id_user, EVENT, 999)

    def test_remove_absent_favorite(self, session: Session, volunteer, event):
        with pytest.raises(NotFoundError):
            favorite_service.remove_favorite(
                session, volunteer.id_user, EVENT, event.id_event
            )


class TestToggle:
    def test_toggle_twice_restores_state(self, session: Session, volunteer, event):
        first = favorite_service.toggle_favorite(
            session, volunteer.id_user, EVENT, event.id_event
        )
        second = favorite_service.toggle_favorite(
            session, volunteer.id_user, EVENT, event.id_event
        )

        assert first.is_favorite is True
        assert second.is_favorite is False
        assert favorite_service.get_favorites(session, volunteer.id_user) == []


class TestGetFavorites:
    def test_enriched_newest_first(
        self, session: Session, volunteer, opportunity, event
    ):
        favorite_service.add_favorite(
            session, volunteer.id_user, URGENT_NEED, opportunity.id_opportunity
        )
        favorite_service.add_favorite(session, volunteer.id_user, EVENT, event.id_event)

        result = favorite_service.get_favorites(session, volunteer.id_user)

        assert [f.item_title for f in result] == ["Charity run", "Blood drive helpers"]
        assert result[0].item_location == "Gdansk"

    def test_deleted_item_is_listed_without_details(
        self, session: Session, volunteer, event
    ):
        favorite_service.add_favorite(session, volunteer.id_user, EVENT, event.id_event)
        session.delete(event)
        session.commit()

        result = favorite_service.get_favorites(session, volunteer.id_user)

        assert len(result) == 1
        assert result[0].item_title is None
