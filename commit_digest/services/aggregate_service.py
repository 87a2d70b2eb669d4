import logging
from contextlib import nullcontext
from datetime import datetime, timezone
from typing import List, Optional

import requests

from commit_digest.core.config import Settings, get_settings
from commit_digest.core.errors import ValidationError
from commit_digest.models.schemas import Credentials, DateWindow, DisplayRow
from commit_digest.services import collector_service, filter_service, grouping_service

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # naive 값은 UTC로 간주
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_inputs(credentials: Credentials, window: DateWindow) -> None:
    missing = []
    if not (credentials.username or "").strip():
        missing.append("username")
    if not (credentials.token or "").strip():
        missing.append("token")
    if window.start is None:
        missing.append("start date")
    if window.end is None:
        missing.append("end date")
    if missing:
        raise ValidationError(missing)
    if _as_utc(window.start) > _as_utc(window.end):
        raise ValidationError(message="start date must not be after end date")


def aggregate(
    credentials: Credentials,
    window: DateWindow,
    author_email: Optional[str] = None,
    session: Optional[requests.Session] = None,
    settings: Optional[Settings] = None,
) -> List[DisplayRow]:
    """
    Run one aggregation: list projects, collect their commits in the window,
    filter by author and group into display rows.

    Inputs are validated before any network call. Errors from the remote API
    propagate unchanged and no partial rows are returned.
    """
    validate_inputs(credentials, window)
    settings = settings or get_settings()

    logger.info(
        "Aggregating commits for %s between %s and %s",
        credentials.username,
        window.start.isoformat(),
        window.end.isoformat(),
    )
    # 한 번의 실행 동안 세션 하나를 재사용
    with requests.Session() if session is None else nullcontext(session) as http:
        commits = collector_service.collect_commits(
            credentials, window, session=http, max_workers=settings.max_workers, settings=settings
        )
    commits = filter_service.filter_by_author(commits, author_email)
    rows = grouping_service.group_commits(
        commits,
        group_by=settings.group_by,
        display_timezone=settings.display_timezone,
    )
    logger.info("Aggregated %d commits into %d rows", len(commits), len(rows))
    return rows
