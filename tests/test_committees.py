import pytest
from org_roster.models.committee import Committee
from org_roster.models.committee_membership import CommitteeMembership
from org_roster.models.role import RoleName
from tests.conftest import headers_for


@pytest.fixture
def committee(db_session):
    committee = Committee(name="Outreach", description="Community outreach", is_active=True)
    db_session.add(committee)
    db_session.commit()
    db_session.refresh(committee)
    return committee


def seat_roles(db_session, committee) -> dict[int, str]:
    db_session.expire_all()
    seats = db_session.query(CommitteeMembership).filter_by(committee_id=committee.id).all()
    return {seat.member_id: seat.role for seat in seats}


class TestCommitteeCreation:
    """Tests for POST /api/committees"""

    def test_officer_creates_committee(self, client, finance_officer):
        response = client.post(
            "/api/committees",
            headers=headers_for(finance_officer),
            json={"name": "Fundraising", "description": "Raises funds"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Fundraising"
        assert data["chair_id"] is None
        assert data["is_active"] is True

    def test_member_cannot_create_committee(self, client, regular_member):
        response = client.post(
            "/api/committees",
            headers=headers_for(regular_member),
            json={"name": "Rogue Committee"},
        )
        assert response.status_code == 403

    def test_duplicate_name_rejected(self, client, finance_officer, committee):
        response = client.post(
            "/api/committees",
            headers=headers_for(finance_officer),
            json={"name": "Outreach"},
        )
        assert response.status_code == 400

    def test_missing_name(self, client, finance_officer):
        response = client.post("/api/committees", headers=headers_for(finance_officer), json={})
        assert response.status_code == 422


class TestCommitteeRetrieval:
    """Tests for listing and reading committees"""

    def test_member_lists_committees(self, client, regular_member, committee):
        response = client.get("/api/committees", headers=headers_for(regular_member))

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["committees"][0]["name"] == "Outreach"

    def test_exclude_inactive(self, client, db_session, regular_member, committee):
        db_session.add(Committee(name="Dormant", is_active=False))
        db_session.commit()

        response = client.get(
            "/api/committees?include_inactive=false", headers=headers_for(regular_member)
        )
        assert [c["name"] for c in response.json()["committees"]] == ["Outreach"]

    def test_pending_user_cannot_list(self, client, pending_applicant, committee):
        response = client.get("/api/committees", headers=headers_for(pending_applicant))
        assert response.status_code == 403

    def test_get_unknown_committee(self, client, regular_member):
        response = client.get("/api/committees/999", headers=headers_for(regular_member))
        assert response.status_code == 404


class TestCommitteeChair:
    """Tests for PUT /api/committees/{id}/chair"""

    def test_assign_chair_creates_seat(self, client, db_session, finance_officer, regular_member, committee):
        response = client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers_for(finance_officer),
            json={"member_id": regular_member.id},
        )

        assert response.status_code == 200
        assert response.json()["chair_id"] == regular_member.id

        seat = (
            db_session.query(CommitteeMembership)
            .filter_by(committee_id=committee.id, member_id=regular_member.id)
            .one()
        )
        assert seat.role == "Chair"

    def test_assign_chair_promotes_existing_seat(
        self, client, db_session, finance_officer, regular_member, committee
    ):
        db_session.add(
            CommitteeMembership(committee_id=committee.id, member_id=regular_member.id, role="Secretary")
        )
        db_session.commit()

        response = client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers_for(finance_officer),
            json={"member_id": regular_member.id},
        )

        assert response.status_code == 200
        seats = db_session.query(CommitteeMembership).filter_by(committee_id=committee.id).all()
        assert len(seats) == 1
        assert seats[0].role == "Chair"

    def test_pending_user_cannot_chair(self, client, finance_officer, pending_applicant, committee):
        response = client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers_for(finance_officer),
            json={"member_id": pending_applicant.id},
        )
        assert response.status_code == 400

    def test_inactive_member_cannot_chair(self, client, finance_officer, make_member, committee):
        inactive = make_member("inactive-1", RoleName.INACTIVE_MEMBER)
        response = client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers_for(finance_officer),
            json={"member_id": inactive.id},
        )
        assert response.status_code == 400

    def test_inactive_committee_cannot_have_chair(
        self, client, db_session, finance_officer, regular_member, committee
    ):
        committee.is_active = False
        db_session.commit()

        response = client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers_for(finance_officer),
            json={"member_id": regular_member.id},
        )
        assert response.status_code == 400

    def test_member_cannot_assign_chair(self, client, regular_member, committee):
        response = client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers_for(regular_member),
            json={"member_id": regular_member.id},
        )
        assert response.status_code == 403

    def test_deactivating_committee_clears_chair(
        self, client, finance_officer, regular_member, committee
    ):
        headers = headers_for(finance_officer)
        client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers,
            json={"member_id": regular_member.id},
        )

        response = client.patch(
            f"/api/committees/{committee.id}", headers=headers, json={"is_active": False}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_active"] is False
        assert data["chair_id"] is None

    def test_deactivating_committee_demotes_chair_seat(
        self, client, db_session, finance_officer, regular_member, committee
    ):
        headers = headers_for(finance_officer)
        client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers,
            json={"member_id": regular_member.id},
        )

        client.patch(f"/api/committees/{committee.id}", headers=headers, json={"is_active": False})

        assert seat_roles(db_session, committee) == {regular_member.id: "Member"}

    def test_replacing_chair_demotes_previous_chair(
        self, client, db_session, finance_officer, regular_member, make_member, committee
    ):
        successor = make_member("member-2", RoleName.MEMBER)
        headers = headers_for(finance_officer)
        for member in (regular_member, successor):
            response = client.put(
                f"/api/committees/{committee.id}/chair",
                headers=headers,
                json={"member_id": member.id},
            )
            assert response.status_code == 200

        assert response.json()["chair_id"] == successor.id
        roles = seat_roles(db_session, committee)
        assert roles == {regular_member.id: "Member", successor.id: "Chair"}
        assert list(roles.values()).count("Chair") == 1

    def test_reassigning_same_chair_keeps_single_seat(
        self, client, db_session, finance_officer, regular_member, committee
    ):
        headers = headers_for(finance_officer)
        for _ in range(2):
            client.put(
                f"/api/committees/{committee.id}/chair",
                headers=headers,
                json={"member_id": regular_member.id},
            )

        assert seat_roles(db_session, committee) == {regular_member.id: "Chair"}


class TestChairFollowsMembership:
    """A chair who leaves active service no longer chairs anything"""

    @pytest.fixture
    def chaired(self, client, finance_officer, regular_member, committee):
        response = client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers_for(finance_officer),
            json={"member_id": regular_member.id},
        )
        assert response.status_code == 200
        return committee

    def test_deactivated_member_loses_chair(
        self, client, db_session, finance_officer, regular_member, chaired
    ):
        response = client.post(
            f"/api/members/{regular_member.id}/deactivate",
            headers=headers_for(finance_officer),
        )
        assert response.status_code == 200

        committee = client.get(f"/api/committees/{chaired.id}", headers=headers_for(finance_officer))
        assert committee.json()["chair_id"] is None
        assert seat_roles(db_session, chaired) == {regular_member.id: "Member"}

    def test_resigned_member_loses_chair(self, client, db_session, regular_member, chaired):
        response = client.post("/api/members/me/resign", headers=headers_for(regular_member))
        assert response.status_code == 200

        db_session.refresh(chaired)
        assert chaired.chair_id is None
        assert seat_roles(db_session, chaired) == {regular_member.id: "Member"}

    def test_role_change_keeps_chair(
        self, client, db_session, president, regular_member, chaired
    ):
        response = client.patch(
            f"/api/members/{regular_member.id}/role",
            headers=headers_for(president),
            json={"role": "Finance Officer"},
        )
        assert response.status_code == 200

        db_session.refresh(chaired)
        assert chaired.chair_id == regular_member.id

    def test_other_committees_untouched(
        self, client, db_session, finance_officer, regular_member, make_member, chaired
    ):
        other_chair = make_member("member-2", RoleName.MEMBER)
        other = Committee(name="Events", is_active=True)
        db_session.add(other)
        db_session.commit()
        client.put(
            f"/api/committees/{other.id}/chair",
            headers=headers_for(finance_officer),
            json={"member_id": other_chair.id},
        )

        client.post(
            f"/api/members/{regular_member.id}/deactivate",
            headers=headers_for(finance_officer),
        )

        db_session.refresh(other)
        assert other.chair_id == other_chair.id


class TestCommitteeSeats:
    """Tests for committee member seats"""

    def test_add_and_list_seats(self, client, finance_officer, regular_member, committee):
        headers = headers_for(finance_officer)
        response = client.post(
            f"/api/committees/{committee.id}/members",
            headers=headers,
            json={"member_id": regular_member.id, "role": "Treasurer"},
        )

        assert response.status_code == 201
        seat = response.json()
        assert seat["member_id"] == regular_member.id
        assert seat["role"] == "Treasurer"
        assert "joined_at" in seat

        listing = client.get(f"/api/committees/{committee.id}/members", headers=headers)
        assert [s["member_id"] for s in listing.json()] == [regular_member.id]

    def test_duplicate_seat_rejected(self, client, finance_officer, regular_member, committee):
        headers = headers_for(finance_officer)
        payload = {"member_id": regular_member.id}
        client.post(f"/api/committees/{committee.id}/members", headers=headers, json=payload)

        response = client.post(f"/api/committees/{committee.id}/members", headers=headers, json=payload)
        assert response.status_code == 400

    def test_my_committees(self, client, db_session, regular_member, committee):
        db_session.add(CommitteeMembership(committee_id=committee.id, member_id=regular_member.id))
        db_session.commit()

        response = client.get("/api/committees/mine", headers=headers_for(regular_member))

        assert response.status_code == 200
        seats = response.json()
        assert len(seats) == 1
        assert seats[0]["committee_id"] == committee.id
        assert seats[0]["role"] == "Member"

    def test_removing_chair_vacates_chair(
        self, client, db_session, finance_officer, regular_member, committee
    ):
        headers = headers_for(finance_officer)
        client.put(
            f"/api/committees/{committee.id}/chair",
            headers=headers,
            json={"member_id": regular_member.id},
        )

        response = client.delete(
            f"/api/committees/{committee.id}/members/{regular_member.id}", headers=headers
        )

        assert response.status_code == 204
        db_session.refresh(committee)
        assert committee.chair_id is None

    def test_remove_missing_seat(self, client, finance_officer, regular_member, committee):
        response = client.delete(
            f"/api/committees/{committee.id}/members/{regular_member.id}",
            headers=headers_for(finance_officer),
        )
        assert response.status_code == 404


class TestCommitteeDeletion:
    """Tests for DELETE /api/committees/{id}"""

    def test_delete_committee_removes_seats(
        self, client, db_session, finance_officer, regular_member, committee
    ):
        committee_id = committee.id
        db_session.add(CommitteeMembership(committee_id=committee_id, member_id=regular_member.id))
        db_session.commit()

        response = client.delete(f"/api/committees/{committee_id}", headers=headers_for(finance_officer))

        assert response.status_code == 204
        assert db_session.query(Committee).filter_by(id=committee_id).first() is None
        assert db_session.query(CommitteeMembership).filter_by(committee_id=committee_id).count() == 0

    def test_member_cannot_delete(self, client, regular_member, committee):
        response = client.delete(f"/api/committees/{committee.id}", headers=headers_for(regular_member))
        assert response.status_code == 403
