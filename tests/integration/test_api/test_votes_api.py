"""Integration tests for the vote endpoints."""
import pytest


def _vote_payload(**overrides):
    payload = {
        "title": "Budget 2025",
        "description": "Approve the yearly budget",
        "visibility": "public",
        "min_percent_answers": 0,
        "acceptance_criteria": "majority",
        "question": {
            "prompt": "Do you approve the budget?",
            "type": "single_choice",
            "options": [{"content": "Yes"}, {"content": "No"}],
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def vote_id(client, admin_headers):
    response = client.post("/api/v1/votes", json=_vote_payload(), headers=admin_headers)
    assert response.status_code == 200
    return response.json()["id"]


def _options(client, vote_id, headers):
    return [o["id"] for o in client.get(f"/api/v1/votes/{vote_id}", headers=headers).json()["question"]["options"]]


@pytest.mark.integration
class TestVoteAdmin:
    """Test vote management endpoints."""

    def test_create_vote(self, client, admin_headers):
        response = client.post("/api/v1/votes", json=_vote_payload(), headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "not_started"
        assert data["current_ballot"] == 1
        assert data["meeting_id"] is None

    def test_create_vote_unknown_meeting(self, client, admin_headers):
        response = client.post("/api/v1/votes", json=_vote_payload(meeting_id="missing"), headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"detail": "Meeting not found"}

    def test_create_vote_invalid_percent(self, client, admin_headers):
        response = client.post("/api/v1/votes", json=_vote_payload(min_percent_answers=150), headers=admin_headers)

        assert response.status_code == 422

    def test_private_votes_hidden_from_members(self, client, admin_headers, member_headers):
        client.post("/api/v1/votes", json=_vote_payload(title="Public"), headers=admin_headers)
        client.post("/api/v1/votes", json=_vote_payload(title="Board", visibility="private"), headers=admin_headers)

        member_view = client.get("/api/v1/votes", headers=member_headers).json()
        admin_view = client.get("/api/v1/votes", headers=admin_headers).json()

        assert [v["title"] for v in member_view] == ["Public"]
        assert {v["title"] for v in admin_view} == {"Public", "Board"}

    def test_patch_vote(self, client, vote_id, admin_headers):
        response = client.patch(
            f"/api/v1/votes/{vote_id}",
            json={"acceptance_criteria": "unanimity"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["acceptance_criteria"] == "unanimity"

    def test_member_cannot_open(self, client, vote_id, member_headers):
        response = client.post(f"/api/v1/votes/{vote_id}/open", headers=member_headers)

        assert response.status_code == 403

    def test_closed_vote_cannot_reopen(self, client, vote_id, admin_headers):
        client.post(f"/api/v1/votes/{vote_id}/close", headers=admin_headers)

        response = client.post(f"/api/v1/votes/{vote_id}/open", headers=admin_headers)

        assert response.status_code == 422
        assert response.json() == {"detail": "Vote is already closed"}

    def test_delete_vote(self, client, vote_id, admin_headers):
        response = client.delete(f"/api/v1/votes/{vote_id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/api/v1/votes/{vote_id}", headers=admin_headers).status_code == 404

    def test_private_vote_not_found_for_members(self, client, admin_headers, member_headers):
        created = client.post("/api/v1/votes", json=_vote_payload(visibility="private"), headers=admin_headers)
        private_id = created.json()["id"]
        client.post(f"/api/v1/votes/{private_id}/open", headers=admin_headers)
        yes = _options(client, private_id, admin_headers)[0]

        response = client.get(f"/api/v1/votes/{private_id}", headers=member_headers)
        assert response.status_code == 404
        assert response.json() == {"detail": "Vote not found"}

        answered = client.post(
            f"/api/v1/votes/{private_id}/answers", json={"option_ids": [yes]}, headers=member_headers
        )
        assert answered.status_code == 404
        assert client.get(f"/api/v1/votes/{private_id}/results", headers=member_headers).status_code == 404
        assert client.get(f"/api/v1/votes/{private_id}/winning-option", headers=member_headers).status_code == 404

        results = client.get(f"/api/v1/votes/{private_id}/results", headers=admin_headers).json()
        assert [c["count"] for c in results["option_counts"]] == [0, 0]

    def test_other_association_cannot_reach_vote(self, client, vote_id, admin_headers, outsider_headers):
        assert client.get(f"/api/v1/votes/{vote_id}", headers=outsider_headers).status_code == 404
        assert client.get(f"/api/v1/votes/{vote_id}/results", headers=outsider_headers).status_code == 404

        patched = client.patch(f"/api/v1/votes/{vote_id}", json={"title": "Hijacked"}, headers=outsider_headers)
        assert patched.status_code == 404
        assert client.post(f"/api/v1/votes/{vote_id}/close", headers=outsider_headers).status_code == 404
        assert client.delete(f"/api/v1/votes/{vote_id}", headers=outsider_headers).status_code == 404

        vote = client.get(f"/api/v1/votes/{vote_id}", headers=admin_headers).json()
        assert vote["title"] == "Budget 2025"
        assert vote["status"] == "not_started"
        assert client.get("/api/v1/votes", headers=outsider_headers).json() == []


@pytest.mark.integration
class TestVotingFlow:
    """Test the complete voting workflow."""

    def test_complete_voting_flow(self, client, vote_id, admin_headers, make_user, headers_for):
        """Open -> answer -> results -> run-off -> close."""
        voters = [headers_for(make_user()) for _ in range(3)]
        yes, no = _options(client, vote_id, admin_headers)

        # Not open yet
        refused = client.post(f"/api/v1/votes/{vote_id}/answers", json={"option_ids": [yes]}, headers=voters[0])
        assert refused.status_code == 401
        assert refused.json() == {"detail": "Vote is not open"}

        assert client.post(f"/api/v1/votes/{vote_id}/open", headers=admin_headers).json()["status"] == "open"

        for headers, option_id in zip(voters, [yes, yes, no]):
            response = client.post(f"/api/v1/votes/{vote_id}/answers", json={"option_ids": [option_id]}, headers=headers)
            assert response.status_code == 200

        duplicate = client.post(f"/api/v1/votes/{vote_id}/answers", json={"option_ids": [no]}, headers=voters[0])
        assert duplicate.status_code == 401

        results = client.get(f"/api/v1/votes/{vote_id}/results", headers=voters[0]).json()
        assert [c["count"] for c in results["option_counts"]] == [2, 1]

        winner = client.get(f"/api/v1/votes/{vote_id}/winning-option", headers=voters[0]).json()
        assert winner["option_id"] == yes
        assert winner["is_valid"] is True
        assert winner["total_votes_count"] == 3

        # Run-off with a new question
        ballot = client.post(
            f"/api/v1/votes/{vote_id}/ballots",
            json={"prompt": "Amended budget?", "type": "single_choice", "options": [{"content": "For"}, {"content": "Against"}]},
            headers=admin_headers,
        )
        assert ballot.status_code == 200
        full = client.get(f"/api/v1/votes/{vote_id}", headers=admin_headers).json()
        assert full["current_ballot"] == 2
        assert full["question"]["id"] == ballot.json()["id"]

        results = client.get(f"/api/v1/votes/{vote_id}/results", headers=voters[0]).json()
        assert [c["count"] for c in results["option_counts"]] == [0, 0]

        again = client.post(
            f"/api/v1/votes/{vote_id}/answers",
            json={"option_ids": [ballot.json()["options"][0]["id"]]},
            headers=voters[0],
        )
        assert again.status_code == 200

        assert client.post(f"/api/v1/votes/{vote_id}/close", headers=admin_headers).json()["status"] == "done"
        late = client.post(
            f"/api/v1/votes/{vote_id}/answers",
            json={"option_ids": [ballot.json()["options"][1]["id"]]},
            headers=voters[1],
        )
        assert late.status_code == 401

    def test_quorum_reported(self, client, admin_headers, make_user, make_meeting, headers_for):
        members = [make_user() for _ in range(4)]
        meeting = make_meeting(members)
        created = client.post(
            "/api/v1/votes",
            json=_vote_payload(min_percent_answers=75, meeting_id=meeting.id),
            headers=admin_headers,
        ).json()
        vote_id = created["id"]
        client.post(f"/api/v1/votes/{vote_id}/open", headers=admin_headers)
        yes, _ = _options(client, vote_id, admin_headers)

        for member in members[:2]:
            client.post(f"/api/v1/votes/{vote_id}/answers", json={"option_ids": [yes]}, headers=headers_for(member))

        winner = client.get(f"/api/v1/votes/{vote_id}/winning-option", headers=admin_headers).json()
        assert winner["eligible_voters_count"] == 4
        assert winner["is_acceptance_criteria_met"] is True
        assert winner["is_min_percent_answers_met"] is False
        assert winner["is_valid"] is False

    def test_ballot_on_closed_vote(self, client, vote_id, admin_headers):
        client.post(f"/api/v1/votes/{vote_id}/close", headers=admin_headers)

        response = client.post(
            f"/api/v1/votes/{vote_id}/ballots",
            json={"prompt": "Again?", "type": "single_choice", "options": [{"content": "Yes"}]},
            headers=admin_headers,
        )

        assert response.status_code == 422
