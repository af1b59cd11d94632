"""Integration tests for the survey endpoints."""
import pytest


SURVEY_PAYLOAD = {
    "title": "Annual satisfaction",
    "description": "Tell us what you think",
    "visibility": "public",
    "questions": [
        {
            "prompt": "Should we keep the Friday meetups?",
            "type": "single_choice",
            "options": [{"content": "Yes"}, {"content": "No"}],
        },
        {
            "prompt": "Which workshops interest you?",
            "type": "mutliple_choice",
            "options": [{"content": "Pottery"}, {"content": "Gardening"}],
        },
    ],
}


@pytest.fixture
def survey_id(client, admin_headers):
    response = client.post("/api/v1/surveys", json=SURVEY_PAYLOAD, headers=admin_headers)
    assert response.status_code == 200
    return response.json()["id"]


@pytest.mark.integration
class TestSurveyAdmin:
    """Test survey management endpoints."""

    def test_create_and_get(self, client, survey_id, member_headers):
        response = client.get(f"/api/v1/surveys/{survey_id}", headers=member_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Annual satisfaction"
        assert [q["type"] for q in data["questions"]] == ["single_choice", "multiple_choice"]
        assert [o["content"] for o in data["questions"][0]["options"]] == ["Yes", "No"]

    def test_list(self, client, survey_id, member_headers):
        response = client.get("/api/v1/surveys", headers=member_headers)

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [survey_id]

    def test_create_requires_admin(self, client, member_headers):
        response = client.post("/api/v1/surveys", json=SURVEY_PAYLOAD, headers=member_headers)

        assert response.status_code == 403
        assert response.json() == {"detail": "Not authorized"}

    def test_create_rejects_html_title(self, client, admin_headers):
        payload = dict(SURVEY_PAYLOAD, title="<b></b>")

        response = client.post("/api/v1/surveys", json=payload, headers=admin_headers)

        assert response.status_code == 422

    def test_patch(self, client, survey_id, admin_headers):
        response = client.patch(
            f"/api/v1/surveys/{survey_id}",
            json={"visibility": "private"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["visibility"] == "private"
        assert response.json()["title"] == "Annual satisfaction"

    def test_replace(self, client, survey_id, admin_headers):
        payload = dict(SURVEY_PAYLOAD, title="Replaced", questions=SURVEY_PAYLOAD["questions"][:1])

        response = client.put(f"/api/v1/surveys/{survey_id}", json=payload, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["id"] != survey_id
        assert len(response.json()["questions"]) == 1
        assert client.get(f"/api/v1/surveys/{survey_id}", headers=admin_headers).status_code == 404

    def test_add_and_remove_question(self, client, survey_id, admin_headers):
        added = client.post(
            f"/api/v1/surveys/{survey_id}/questions",
            json={"prompt": "Next date?", "type": "single_choice", "options": [{"content": "June"}]},
            headers=admin_headers,
        )
        assert added.status_code == 200
        assert [q["prompt"] for q in added.json()][-1] == "Next date?"

        removed = client.delete(
            f"/api/v1/surveys/{survey_id}/questions/{added.json()[-1]['id']}",
            headers=admin_headers,
        )
        assert removed.status_code == 200
        assert len(removed.json()) == 2

    def test_delete(self, client, survey_id, admin_headers):
        response = client.delete(f"/api/v1/surveys/{survey_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["id"] == survey_id
        missing = client.get(f"/api/v1/surveys/{survey_id}", headers=admin_headers)
        assert missing.status_code == 404
        assert missing.json() == {"detail": "Survey not found"}

    def test_other_association_cannot_reach_survey(self, client, survey_id, admin_headers, outsider_headers):
        response = client.get(f"/api/v1/surveys/{survey_id}", headers=outsider_headers)
        assert response.status_code == 404
        assert response.json() == {"detail": "Survey not found"}

        assert client.get(f"/api/v1/surveys/{survey_id}/results", headers=outsider_headers).status_code == 404
        patched = client.patch(f"/api/v1/surveys/{survey_id}", json={"title": "Hijacked"}, headers=outsider_headers)
        assert patched.status_code == 404
        assert client.delete(f"/api/v1/surveys/{survey_id}", headers=outsider_headers).status_code == 404

        survey = client.get(f"/api/v1/surveys/{survey_id}", headers=admin_headers).json()
        assert survey["title"] == "Annual satisfaction"


@pytest.mark.integration
class TestSurveyAnswers:
    """Test answering a survey over HTTP."""

    def test_answer_and_results(self, client, survey_id, member_headers):
        survey = client.get(f"/api/v1/surveys/{survey_id}", headers=member_headers).json()
        single, multiple = survey["questions"]

        response = client.post(
            f"/api/v1/surveys/{survey_id}/answers",
            json={"answers": [
                {"question_id": single["id"], "option_ids": [single["options"][0]["id"]]},
                {"question_id": multiple["id"], "option_ids": [o["id"] for o in multiple["options"]]},
            ]},
            headers=member_headers,
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        results = client.get(f"/api/v1/surveys/{survey_id}/results", headers=member_headers).json()
        assert [c["count"] for c in results[0]["option_counts"]] == [1, 0]
        assert [c["count"] for c in results[1]["option_counts"]] == [1, 1]

    def test_second_answer_unauthorized(self, client, survey_id, member_headers):
        survey = client.get(f"/api/v1/surveys/{survey_id}", headers=member_headers).json()
        single = survey["questions"][0]
        body = {"answers": [{"question_id": single["id"], "option_ids": [single["options"][1]["id"]]}]}

        assert client.post(f"/api/v1/surveys/{survey_id}/answers", json=body, headers=member_headers).status_code == 200
        response = client.post(f"/api/v1/surveys/{survey_id}/answers", json=body, headers=member_headers)

        assert response.status_code == 401
        assert response.json() == {"detail": "You have already answered this question"}

    def test_single_choice_with_two_options(self, client, survey_id, member_headers):
        survey = client.get(f"/api/v1/surveys/{survey_id}", headers=member_headers).json()
        single = survey["questions"][0]

        response = client.post(
            f"/api/v1/surveys/{survey_id}/answers",
            json={"answers": [{"question_id": single["id"], "option_ids": [o["id"] for o in single["options"]]}]},
            headers=member_headers,
        )

        assert response.status_code == 422
        assert response.json() == {"detail": "Single choice question can only have one answer"}

    def test_answers_require_authentication(self, client, survey_id):
        response = client.post(
            f"/api/v1/surveys/{survey_id}/answers",
            json={"answers": [{"question_id": "any", "option_ids": []}]},
        )

        assert response.status_code == 401
