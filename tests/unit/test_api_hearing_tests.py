"""Tests for hearing test submission."""

import re
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

SUBMIT_URL = "/api/acme-corp/profiles/emp-001/tests"


@pytest.mark.unit
class TestSubmitTestResults:

    def test_submit(self, client, auth_headers, valid_submission):
        response = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Test results saved successfully"
        assert re.fullmatch(r"test-\d+-[0-9a-f]{9}", data["test_id"])

        expected_due = (datetime.now(timezone.utc) + timedelta(days=365)).date()
        due = datetime.strptime(data["next_test_due"], "%Y-%m-%d").date()
        assert abs((due - expected_due).days) <= 1

    def test_next_test_due_from_submission_time(self, client, auth_headers, repositories, valid_submission):
        submitted_at = datetime(2024, 3, 1, 23, 59, tzinfo=timezone.utc)

        with patch.object(repositories.hearing_test, "_clock", return_value=submitted_at):
            response = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)

        assert response.json()["next_test_due"] == "2025-03-01"
        assert response.json()["test_id"].startswith(f"test-{int(submitted_at.timestamp() * 1000)}-")

    def test_submission_appears_in_profile_detail(self, client, auth_headers, valid_submission):
        test_id = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers).json()["test_id"]

        detail = client.get("/api/acme-corp/profiles/emp-001", headers=auth_headers).json()

        assert len(detail["previous_tests"]) == 1
        previous = detail["previous_tests"][0]
        assert previous["id"] == test_id
        assert previous["tester_id"] == "tester-001"
        assert previous["device_id"] == "iPad-12345"
        assert previous["test_type"] == "audiometry"
        assert previous["results"] == valid_submission["results"]
        assert previous["test_date"].startswith("2024-03-01T09:30:00")

    def test_submissions_accumulate_in_order(self, client, auth_headers, valid_submission):
        first = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers).json()["test_id"]
        second = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers).json()["test_id"]

        detail = client.get("/api/acme-corp/profiles/emp-001", headers=auth_headers).json()

        assert [t["id"] for t in detail["previous_tests"]] == [first, second]

    def test_empty_results_accepted(self, client, auth_headers, valid_submission):
        valid_submission["results"] = []

        response = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)

        assert response.status_code == 201

    def test_fractional_levels_round_trip(self, client, auth_headers, valid_submission):
        valid_submission["results"][0]["decibel_db"] = 22.5
        valid_submission["results"][1]["frequency_hz"] = 1500.5

        response = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)

        assert response.status_code == 201
        detail = client.get("/api/acme-corp/profiles/emp-001", headers=auth_headers).json()
        results = detail["previous_tests"][0]["results"]
        assert results[0]["decibel_db"] == 22.5
        assert results[1]["frequency_hz"] == 1500.5
        assert results == valid_submission["results"]

    def test_integer_levels_stay_integers(self, client, auth_headers, valid_submission):
        client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)

        detail = client.get("/api/acme-corp/profiles/emp-001", headers=auth_headers).json()
        first = detail["previous_tests"][0]["results"][0]

        assert isinstance(first["decibel_db"], int)
        assert isinstance(first["frequency_hz"], int)

    def test_test_type_defaults_to_audiometry(self, client, auth_headers, valid_submission):
        del valid_submission["test_metadata"]["test_type"]

        client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)
        detail = client.get("/api/acme-corp/profiles/emp-001", headers=auth_headers).json()

        assert detail["previous_tests"][0]["test_type"] == "audiometry"

    def test_unknown_profile(self, client, auth_headers, valid_submission):
        response = client.post(
            "/api/acme-corp/profiles/emp-999/tests", json=valid_submission, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Profile not found"}

    def test_unknown_profile_reported_before_invalid_body(self, client, auth_headers):
        response = client.post(
            "/api/acme-corp/profiles/emp-999/tests", json={"bogus": True}, headers=auth_headers
        )

        assert response.status_code == 404

    def test_profile_of_other_tenant(self, client, auth_headers, valid_submission):
        response = client.post(
            "/api/tech-solutions/profiles/emp-001/tests", json=valid_submission, headers=auth_headers
        )

        assert response.status_code == 404

    @pytest.mark.parametrize("mutate,field", [
        (lambda s: s.pop("test_metadata"), "body.test_metadata"),
        (lambda s: s.pop("results"), "body.results"),
        (lambda s: s["test_metadata"].pop("tester_id"), "body.test_metadata.tester_id"),
        (lambda s: s["test_metadata"].update(test_date="yesterday"), "body.test_metadata.test_date"),
        (lambda s: s["results"][0].update(ear="middle"), "body.results.0.ear"),
        (lambda s: s["results"][0].update(response="maybe"), "body.results.0.response"),
        (lambda s: s["results"][1].update(frequency_hz=None), "body.results.1.frequency_hz"),
        (lambda s: s["results"][1].update(decibel_db="loud"), "body.results.1.decibel_db"),
        (lambda s: s["results"][0].pop("step"), "body.results.0.step"),
    ])
    def test_invalid_submission(self, client, auth_headers, valid_submission, mutate, field):
        mutate(valid_submission)

        response = client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Invalid test data"
        assert field in [error["field"] for error in data["errors"]]

    @pytest.mark.parametrize("content", [b"{not json", b"", b"[]"])
    def test_malformed_body(self, client, auth_headers, content):
        response = client.post(
            SUBMIT_URL,
            content=content,
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid test data"

    def test_rejected_submission_is_not_stored(self, client, auth_headers, valid_submission):
        valid_submission["results"][0]["ear"] = "middle"
        client.post(SUBMIT_URL, json=valid_submission, headers=auth_headers)

        detail = client.get("/api/acme-corp/profiles/emp-001", headers=auth_headers).json()

        assert detail["previous_tests"] == []

    def test_requires_token(self, client, valid_submission):
        response = client.post(SUBMIT_URL, json=valid_submission)

        assert response.status_code == 401

    def test_non_member_tenant(self, client, acme_only_headers, valid_submission):
        response = client.post(
            "/api/tech-solutions/profiles/emp-101/tests", json=valid_submission, headers=acme_only_headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied to this tenant"
