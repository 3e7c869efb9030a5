"""Tests for the business partner router."""

from fastapi.testclient import TestClient
from sqlmodel import Session

from app.models.activity import UserActivityCreate
from app.models.enums import RelationStatus, UserType
from app.models.relation import VolunteerPartnerRelation
from app.services import activity as activity_service
from app.services import relation as relation_service


class TestTeam:
    def test_team_lists_invited_volunteer(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation_service.invite_volunteer(session, partner.id_user, volunteer.id_user)
        session.commit()

        response = client.get("/partners/me/team", headers=auth_headers(partner))

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["status"] == "invited"
        assert data[0]["volunteer"]["email"] == volunteer.email

    def test_team_status_filter(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation_service.invite_volunteer(session, partner.id_user, volunteer.id_user)
        session.commit()

        response = client.get(
            "/partners/me/team", params={"status": "active"}, headers=auth_headers(partner)
        )

        assert response.status_code == 200
        assert response.json() == []

    def test_invalid_status_filter(self, client: TestClient, partner, auth_headers):
        response = client.get(
            "/partners/me/team", params={"status": "released"}, headers=auth_headers(partner)
        )
        assert response.status_code == 422

    def test_team_requires_partner_account(
        self, client: TestClient, volunteer, auth_headers
    ):
        response = client.get("/partners/me/team", headers=auth_headers(volunteer))
        assert response.status_code == 403

    def test_team_requires_authentication(self, client: TestClient):
        response = client.get("/partners/me/team")
        assert response.status_code == 401


class TestLifecycle:
    def test_invite_then_conflict(
        self, client: TestClient, volunteer, partner, auth_headers
    ):
        url = f"/partners/me/invitations/{volunteer.id_user}"

        first = client.post(url, headers=auth_headers(partner))
        second = client.post(url, headers=auth_headers(partner))

        assert first.status_code == 201
        assert first.json()["status"] == "invited"
        assert second.status_code == 409
        assert second.json()["field"] == "volunteer_partner"

    def test_read_only_partner_cannot_invite(
        self, client: TestClient, volunteer, profile_factory, auth_headers
    ):
        pending_partner = profile_factory(
            UserType.BUSINESS_PARTNER, "pending@example.com", verified=False
        )

        response = client.post(
            f"/partners/me/invitations/{volunteer.id_user}",
            headers=auth_headers(pending_partner),
        )

        assert response.status_code == 403

    def test_read_only_partner_can_browse_team(
        self, client: TestClient, profile_factory, auth_headers
    ):
        pending_partner = profile_factory(
            UserType.BUSINESS_PARTNER, "pending@example.com", verified=False
        )

        response = client.get("/partners/me/team", headers=auth_headers(pending_partner))

        assert response.status_code == 200

    def test_accept_and_release(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation = relation_service.request_to_join(
            session, volunteer.id_user, partner.id_user
        )
        session.commit()
        base = f"/partners/me/relations/{relation.id_relation}"

        accepted = client.post(f"{base}/accept", headers=auth_headers(partner))
        released = client.post(f"{base}/release", headers=auth_headers(partner))

        assert accepted.status_code == 200
        assert accepted.json()["status"] == "active"
        assert accepted.json()["joined_at"] is not None
        assert released.status_code == 200
        assert released.json()["status"] == "released"
        assert released.json()["released_at"] is not None

    def test_accept_twice_is_invalid_state(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation = relation_service.request_to_join(
            session, volunteer.id_user, partner.id_user
        )
        session.commit()
        url = f"/partners/me/relations/{relation.id_relation}/accept"

        client.post(url, headers=auth_headers(partner))
        response = client.post(url, headers=auth_headers(partner))

        assert response.status_code == 422
        assert response.json()["field"] == "status"

    def test_reject_deletes_request(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation = relation_service.request_to_join(
            session, volunteer.id_user, partner.id_user
        )
        session.commit()
        relation_id = relation.id_relation

        response = client.post(
            f"/partners/me/relations/{relation_id}/reject", headers=auth_headers(partner)
        )

        assert response.status_code == 204
        session.expire_all()
        assert session.get(VolunteerPartnerRelation, relation_id) is None

    def test_other_partner_relation_is_forbidden(
        self,
        client: TestClient,
        session: Session,
        volunteer,
        partner,
        other_partner,
        auth_headers,
    ):
        relation = relation_service.request_to_join(
            session, volunteer.id_user, partner.id_user
        )
        session.commit()

        response = client.post(
            f"/partners/me/relations/{relation.id_relation}/accept",
            headers=auth_headers(other_partner),
        )

        assert response.status_code == 403

    def test_unknown_relation(self, client: TestClient, partner, auth_headers):
        response = client.post(
            "/partners/me/relations/4242/accept", headers=auth_headers(partner)
        )
        assert response.status_code == 404

    def test_update_notes(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation = relation_service.invite_volunteer(
            session, partner.id_user, volunteer.id_user
        )
        session.commit()

        response = client.patch(
            f"/partners/me/relations/{relation.id_relation}/notes",
            json={"notes": "Available on weekends"},
            headers=auth_headers(partner),
        )

        assert response.status_code == 200
        assert response.json()["notes"] == "Available on weekends"


class TestRegisterVolunteer:
    def test_register_on_behalf(self, client: TestClient, partner, auth_headers):
        response = client.post(
            "/partners/me/volunteers",
            json={
                "full_name": "Jan Kowalski",
                "email": "jan@example.com",
                "location": "Lodz",
                "skills": "driving, first aid",
            },
            headers=auth_headers(partner),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "active"
        assert data["volunteer"]["skills"] == ["driving", "first aid"]
        assert data["volunteer"]["verification_status"] == "verified"

    def test_register_on_behalf_blank_location(
        self, client: TestClient, partner, auth_headers
    ):
        response = client.post(
            "/partners/me/volunteers",
            json={"full_name": "Jan", "email": "jan@example.com", "location": " "},
            headers=auth_headers(partner),
        )

        assert response.status_code == 422
        assert response.json()["field"] == "location"

    def test_registered_volunteer_cannot_log_in(
        self, client: TestClient, partner, auth_headers
    ):
        client.post(
            "/partners/me/volunteers",
            json={"full_name": "Jan", "email": "jan@example.com", "location": "Lodz"},
            headers=auth_headers(partner),
        )

        response = client.post(
            "/auth/token", data={"username": "jan@example.com", "password": ""}
        )

        assert response.status_code in (401, 422)


class TestSummaryAndActivities:
    def test_summary(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation_service.invite_volunteer(session, partner.id_user, volunteer.id_user)
        session.commit()

        response = client.get("/partners/me/team/summary", headers=auth_headers(partner))

        assert response.status_code == 200
        assert response.json()["invited_members"] == 1
        assert response.json()["total_members"] == 1

    def test_member_activities(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation = relation_service.invite_volunteer(
            session, partner.id_user, volunteer.id_user
        )
        relation_service.accept_invitation(session, volunteer.id_user, relation.id_relation)
        activity_service.record_activity(
            session, volunteer.id_user, UserActivityCreate(activity_type="shift", points_earned=3)
        )
        session.commit()

        response = client.get(
            f"/partners/me/team/{volunteer.id_user}/activities",
            headers=auth_headers(partner),
        )

        assert response.status_code == 200
        assert response.json()[0]["points_earned"] == 3

    def test_member_activities_outside_team(
        self, client: TestClient, volunteer, partner, auth_headers
    ):
        response = client.get(
            f"/partners/me/team/{volunteer.id_user}/activities",
            headers=auth_headers(partner),
        )
        assert response.status_code == 403

    def test_record_member_activity(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation = relation_service.request_to_join(
            session, volunteer.id_user, partner.id_user
        )
        relation_service.accept_request(session, partner.id_user, relation.id_relation)
        session.commit()

        response = client.post(
            f"/partners/me/team/{volunteer.id_user}/activities",
            json={
                "activity_type": "shift",
                "description": "Sorting donations",
                "points_earned": 5,
            },
            headers=auth_headers(partner),
        )

        assert response.status_code == 201
        assert response.json()["id_user"] == volunteer.id_user
        assert response.json()["points_earned"] == 5
        session.refresh(volunteer)
        assert volunteer.points == 5

        summary = client.get("/partners/me/team/summary", headers=auth_headers(partner))
        assert summary.json()["total_points"] == 5
        activities = client.get(
            f"/partners/me/team/{volunteer.id_user}/activities",
            headers=auth_headers(partner),
        )
        assert [a["activity_type"] for a in activities.json()] == ["shift"]

    def test_record_activity_for_invited_volunteer_is_forbidden(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation_service.invite_volunteer(session, partner.id_user, volunteer.id_user)
        session.commit()

        response = client.post(
            f"/partners/me/team/{volunteer.id_user}/activities",
            json={"activity_type": "shift", "points_earned": 5},
            headers=auth_headers(partner),
        )

        assert response.status_code == 403
        session.refresh(volunteer)
        assert volunteer.points == 0

    def test_record_activity_negative_points(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation = relation_service.request_to_join(
            session, volunteer.id_user, partner.id_user
        )
        relation_service.accept_request(session, partner.id_user, relation.id_relation)
        session.commit()

        response = client.post(
            f"/partners/me/team/{volunteer.id_user}/activities",
            json={"activity_type": "shift", "points_earned": -1},
            headers=auth_headers(partner),
        )

        assert response.status_code == 422

    def test_read_only_partner_cannot_record_activity(
        self, client: TestClient, volunteer, profile_factory, auth_headers
    ):
        pending_partner = profile_factory(
            UserType.BUSINESS_PARTNER, "pending@example.com", verified=False
        )

        response = client.post(
            f"/partners/me/team/{volunteer.id_user}/activities",
            json={"activity_type": "shift", "points_earned": 1},
            headers=auth_headers(pending_partner),
        )

        assert response.status_code == 403

    def test_available_volunteers(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        before = client.get(
            "/partners/me/available-volunteers", headers=auth_headers(partner)
        )
        relation_service.invite_volunteer(session, partner.id_user, volunteer.id_user)
        session.commit()
        after = client.get(
            "/partners/me/available-volunteers", headers=auth_headers(partner)
        )

        assert [v["id_user"] for v in before.json()] == [volunteer.id_user]
        assert after.json() == []

    def test_pending_requests(
        self, client: TestClient, session: Session, volunteer, partner, auth_headers
    ):
        relation_service.request_to_join(session, volunteer.id_user, partner.id_user)
        session.commit()

        response = client.get("/partners/me/requests", headers=auth_headers(partner))

        assert response.status_code == 200
        assert response.json()[0]["status"] == RelationStatus.PENDING.value
