"""
Tests for POST /url
"""
import logging
import re
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from alias_shortener.app_factory import create_app
from alias_shortener.dependencies import get_url_saver
from alias_shortener.storage import StorageError, URLExistsError, URLSaver


@pytest.fixture
def url_saver(app):
    """Replace the storage with a mock for the save handler only"""
    saver = Mock(spec=URLSaver)
    saver.save_url.return_value = 1
    app.dependency_overrides[get_url_saver] = lambda: saver
    return saver


class TestSaveURL:
    """End to end against real SQL storage"""

    def test_generates_alias_when_missing(self, client: TestClient, auth):
        response = client.post("/url", json={"url": "https://example.com"}, auth=auth)
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "OK"
        assert re.fullmatch(r"[A-Za-z0-9]{6}", data["alias"])
        assert "error" not in data

        redirect = client.get(f"/{data['alias']}", follow_redirects=False)
        assert redirect.status_code == 302
        assert redirect.headers["location"] == "https://example.com"

    def test_uses_given_alias(self, client: TestClient, auth):
        response = client.post(
            "/url", json={"url": "https://example.com/page", "alias": "mine"}, auth=auth
        )

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "alias": "mine"}

    def test_blank_alias_is_generated(self, client: TestClient, auth):
        response = client.post("/url", json={"url": "https://example.com", "alias": ""}, auth=auth)

        assert response.status_code == 200
        assert len(response.json()["alias"]) == 6

    def test_duplicate_alias(self, client: TestClient, auth):
        first = client.post("/url", json={"url": "https://first.example", "alias": "same"}, auth=auth)
        assert first.status_code == 200

        second = client.post("/url", json={"url": "https://second.example", "alias": "same"}, auth=auth)
        assert second.status_code == 409
        assert second.json() == {"status": "Error", "error": "url already exists"}

        # First mapping still resolvable
        redirect = client.get("/same", follow_redirects=False)
        assert redirect.headers["location"] == "https://first.example"

    def test_alias_length_from_settings(self, settings, logger, storage, auth):
        settings.alias_length = 10
        app = create_app(settings, logger=logger, storage=storage)

        with TestClient(app) as client:
            response = client.post("/url", json={"url": "https://example.com"}, auth=auth)

        assert len(response.json()["alias"]) == 10


class TestSaveValidation:
    """Validation failures never reach the storage"""

    def test_invalid_url(self, client: TestClient, auth, url_saver):
        response = client.post("/url", json={"url": "not-a-url"}, auth=auth)

        assert response.status_code == 400
        assert response.json() == {
            "status": "Error",
            "error": "invalid request",
            "fields": {"url": "is not a valid URL"},
        }
        url_saver.save_url.assert_not_called()

    @pytest.mark.parametrize("body", [{}, {"url": ""}, {"alias": "abc"}])
    def test_missing_url(self, client: TestClient, auth, url_saver, body):
        response = client.post("/url", json=body, auth=auth)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "invalid request"
        assert data["fields"] == {"url": "is a required field"}
        url_saver.save_url.assert_not_called()

    def test_wrong_type(self, client: TestClient, auth, url_saver):
        response = client.post("/url", json={"url": 42}, auth=auth)

        assert response.status_code == 400
        assert response.json()["fields"] == {"url": "is not valid"}

    def test_body_not_an_object(self, client: TestClient, auth, url_saver):
        response = client.post("/url", json=["https://example.com"], auth=auth)

        assert response.status_code == 400
        assert response.json()["error"] == "invalid request"
        url_saver.save_url.assert_not_called()

    def test_malformed_json(self, client: TestClient, auth, url_saver):
        response = client.post(
            "/url",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
            auth=auth,
        )

        assert response.status_code == 400
        assert response.json() == {"status": "Error", "error": "failed to decode request"}
        url_saver.save_url.assert_not_called()


class TestSaveWithMockedStorage:
    """Storage outcomes mapped to responses"""

    def test_passes_url_and_generated_alias(self, client: TestClient, auth, url_saver):
        response = client.post("/url", json={"url": "https://example.com"}, auth=auth)

        alias = response.json()["alias"]
        url_saver.save_url.assert_called_once_with("https://example.com", alias)

    def test_exists_error(self, client: TestClient, auth, url_saver):
        url_saver.save_url.side_effect = URLExistsError("taken")

        response = client.post("/url", json={"url": "https://example.com", "alias": "x"}, auth=auth)

        assert response.status_code == 409
        assert response.json()["error"] == "url already exists"

    def test_storage_failure(self, client: TestClient, auth, url_saver):
        url_saver.save_url.side_effect = StorageError("disk I/O error")

        response = client.post("/url", json={"url": "https://example.com"}, auth=auth)

        assert response.status_code == 500
        assert response.json() == {"status": "Error", "error": "failed to add url"}

    def test_unexpected_failure(self, app, auth, url_saver):
        url_saver.save_url.side_effect = RuntimeError("boom")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post("/url", json={"url": "https://example.com"}, auth=auth)

        assert response.status_code == 500
        assert response.json() == {"status": "Error", "error": "internal error"}

    def test_unexpected_failure_keeps_request_id_and_access_log(self, app, auth, url_saver, caplog):
        caplog.set_level(logging.DEBUG, logger="url_shortener.tests")
        url_saver.save_url.side_effect = RuntimeError("boom")

        with TestClient(app) as client:
            response = client.post(
                "/url",
                json={"url": "https://example.com"},
                headers={"X-Request-ID": "req-500"},
                auth=auth,
            )

        assert response.status_code == 500
        assert response.headers["x-request-id"] == "req-500"

        completed = [r for r in caplog.records if r.getMessage() == "request completed"]
        assert len(completed) == 1
        assert completed[0].context["status"] == 500
        assert completed[0].context["request_id"] == "req-500"

        unhandled = [r for r in caplog.records if r.getMessage() == "unhandled exception"]
        assert len(unhandled) == 1
        assert unhandled[0].exc_info is not None
