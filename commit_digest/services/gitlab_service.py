"""
Thin wrapper around the GitLab REST API (v4) for member projects and their commits.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from commit_digest.core.config import Settings, get_settings
from commit_digest.core.errors import ApiError, AuthError, TransportError
from commit_digest.models.schemas import Credentials, DateWindow, Project, RawCommit

logger = logging.getLogger(__name__)


def _headers(token: Optional[str]) -> Dict[str, str]:
    headers = {
        "Accept": "application/json",
        "User-Agent": "GitLab-Commit-Digest",
    }
    if token:
        headers["Authorization"] = f"Bearer {token.strip()}"
    return headers


def to_gitlab_timestamp(value: datetime) -> str:
    """
    UTC ISO 8601 with millisecond precision, e.g. 2024-03-01T00:00:00.000Z.
    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_gitlab_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error_description") or body.get("error")
        if message:
            return str(message)
    return resp.reason or "Unknown error"


def _get(
    path: str,
    token: Optional[str],
    params: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
    settings: Optional[Settings] = None,
) -> Any:
    settings = settings or get_settings()
    url = f"{settings.gitlab_api_url.rstrip('/')}{path}"
    if session is None:
        with requests.Session() as owned:
            return _get(path, token, params=params, session=owned, settings=settings)

    logger.debug("GET %s params=%s", url, params)
    try:
        resp = session.get(
            url,
            headers=_headers(token),
            params=params,
            timeout=settings.request_timeout,
        )
    except (requests.ConnectionError, requests.Timeout) as exc:
        logger.warning("GitLab request failed: %s (%s)", url, exc)
        raise TransportError(f"Could not reach GitLab at {url}: {exc}") from exc
    except requests.RequestException as exc:
        raise TransportError(f"GitLab request failed: {exc}") from exc

    if resp.status_code in (401, 403):
        logger.warning("GitLab refused %s with %s", url, resp.status_code)
        raise AuthError(resp.status_code, _error_message(resp))
    if not 200 <= resp.status_code < 300:
        logger.warning("GitLab returned %s for %s", resp.status_code, url)
        raise ApiError(resp.status_code, _error_message(resp))

    try:
        return resp.json()
    except ValueError as exc:
        raise ApiError(resp.status_code, "response body is not valid JSON") from exc


def fetch_projects(
    credentials: Credentials,
    session: Optional[requests.Session] = None,
    settings: Optional[Settings] = None,
) -> List[Project]:
    data = _get(
        "/projects",
        credentials.token,
        params={"membership": "true"},
        session=session,
        settings=settings,
    )
    if not isinstance(data, list):
        raise ApiError(200, "expected a list of projects")
    return [Project(id=item["id"], name=item.get("name") or "") for item in data]


def fetch_commits(
    credentials: Credentials,
    project: Project,
    window: DateWindow,
    session: Optional[requests.Session] = None,
    settings: Optional[Settings] = None,
) -> List[RawCommit]:
    params: Dict[str, str] = {}
    if window.start:
        params["since"] = to_gitlab_timestamp(window.start)
    if window.end:
        params["until"] = to_gitlab_timestamp(window.end)
    data = _get(
        f"/projects/{project.id}/repository/commits",
        credentials.token,
        params=params,
        session=session,
        settings=settings,
    )
    if not isinstance(data, list):
        raise ApiError(200, f"expected a list of commits for project {project.name}")

    commits: List[RawCommit] = []
    for item in data:
        commits.append(
            RawCommit(
                project_id=project.id,
                project_name=project.name,
                author_email=item.get("author_email"),
                created_at=parse_gitlab_timestamp(item["created_at"]),
                title=item.get("title") or "",
            )
        )
    return commits
