from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
import requests

from commit_digest.core.errors import ApiError, AuthError, TransportError
from commit_digest.models.schemas import Credentials, DateWindow, Project
from commit_digest.services import gitlab_service

from conftest import FakeResponse, FakeSession, gl_commit

CREDS = Credentials(username="alice", token="glpat-secret")
WINDOW = DateWindow(
    start=datetime(2024, 3, 1, tzinfo=timezone.utc),
    end=datetime(2024, 3, 7, 23, 59, 59, 500000, tzinfo=timezone.utc),
)


def test_timestamp_is_utc_with_milliseconds() -> None:
    ist = timezone(timedelta(hours=5, minutes=30))
    assert gitlab_service.to_gitlab_timestamp(datetime(2024, 3, 1, 5, 30, tzinfo=ist)) == "2024-03-01T00:00:00.000Z"
    assert gitlab_service.to_gitlab_timestamp(datetime(2024, 3, 1, 12, 0)) == "2024-03-01T12:00:00.000Z"


def test_fetch_projects_sends_bearer_and_membership() -> None:
    session = FakeSession({"/projects": [{"id": 1, "name": "api", "path": "api"}, {"id": 2, "name": "web"}]})

    projects = gitlab_service.fetch_projects(CREDS, session=session)

    assert projects == [Project(id=1, name="api"), Project(id=2, name="web")]
    call = session.calls[0]
    assert call["params"] == {"membership": "true"}
    assert call["headers"]["Authorization"] == "Bearer glpat-secret"
    assert call["timeout"] == 15


def test_fetch_commits_encodes_window_and_maps_fields() -> None:
    session = FakeSession(
        {
            "/projects/7/repository/commits": [
                gl_commit("fix bug", "2024-03-02T10:15:00.000+02:00"),
                gl_commit("add test", "2024-03-02T11:00:00Z", email=None),
            ]
        }
    )

    commits = gitlab_service.fetch_commits(CREDS, Project(id=7, name="core"), WINDOW, session=session)

    assert session.calls[0]["params"] == {
        "since": "2024-03-01T00:00:00.000Z",
        "until": "2024-03-07T23:59:59.500Z",
    }
    assert [c.title for c in commits] == ["fix bug", "add test"]
    assert commits[0].project_id == 7
    assert commits[0].project_name == "core"
    assert commits[0].created_at == datetime(2024, 3, 2, 8, 15, tzinfo=timezone.utc)
    assert commits[1].author_email is None


@pytest.mark.parametrize("status", [401, 403])
def test_unauthorized_raises_auth_error(status: int) -> None:
    session = FakeSession({"/projects": FakeResponse(status, {"message": "401 Unauthorized"}, reason="Unauthorized")})

    with pytest.raises(AuthError) as excinfo:
        gitlab_service.fetch_projects(CREDS, session=session)
    assert excinfo.value.status == status


def test_other_status_raises_api_error_with_provider_message() -> None:
    session = FakeSession(
        {"/projects/3/repository/commits": FakeResponse(404, {"message": "404 Project Not Found"}, reason="Not Found")}
    )

    with pytest.raises(ApiError) as excinfo:
        gitlab_service.fetch_commits(CREDS, Project(id=3, name="gone"), WINDOW, session=session)
    assert excinfo.value.status == 404
    assert excinfo.value.message == "404 Project Not Found"


def test_api_error_falls_back_to_reason() -> None:
    session = FakeSession({"/projects": FakeResponse(502, text="<html>bad gateway</html>", reason="Bad Gateway")})

    with pytest.raises(ApiError) as excinfo:
        gitlab_service.fetch_projects(CREDS, session=session)
    assert excinfo.value.message == "Bad Gateway"


def test_invalid_json_on_success_is_api_error() -> None:
    session = FakeSession({"/projects": FakeResponse(200, text="not json")})

    with pytest.raises(ApiError):
        gitlab_service.fetch_projects(CREDS, session=session)


@pytest.mark.parametrize("exc", [requests.ConnectionError("refused"), requests.Timeout("slow")])
def test_network_failure_raises_transport_error(exc: Exception) -> None:
    session = FakeSession({"/projects": exc})

    with pytest.raises(TransportError):
        gitlab_service.fetch_projects(CREDS, session=session)


def test_base_url_comes_from_settings(monkeypatch) -> None:
    from commit_digest.core.config import get_settings

    monkeypatch.setenv("GITLAB_API_URL", "https://git.example.org/api/v4/")
    get_settings.cache_clear()
    session = FakeSession({"https://git.example.org/api/v4/projects": []})

    assert gitlab_service.fetch_projects(CREDS, session=session) == []
    assert session.calls[0]["url"] == "https://git.example.org/api/v4/projects"
