import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import requests

from commit_digest.core.config import Settings
from commit_digest.models.schemas import Credentials, DateWindow, RawCommit
from commit_digest.services import gitlab_service

logger = logging.getLogger(__name__)


def collect_commits(
    credentials: Credentials,
    window: DateWindow,
    session: Optional[requests.Session] = None,
    max_workers: int = 1,
    settings: Optional[Settings] = None,
) -> List[RawCommit]:
    """
    Fetch commits in ``window`` for every project the user is a member of.

    Results keep project listing order, then API order within a project,
    even when projects are fetched concurrently. Any failure aborts the run.
    """
    projects = gitlab_service.fetch_projects(credentials, session=session, settings=settings)
    logger.debug("Found %d member projects", len(projects))

    def _fetch(project):
        return gitlab_service.fetch_commits(
            credentials, project, window, session=session, settings=settings
        )

    if max_workers > 1 and len(projects) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(projects))) as pool:
            # map()은 제출 순서대로 결과를 돌려줌
            per_project = list(pool.map(_fetch, projects))
    else:
        per_project = [_fetch(project) for project in projects]

    commits: List[RawCommit] = []
    for project, project_commits in zip(projects, per_project):
        logger.debug("Project %s (%d): %d commits", project.name, project.id, len(project_commits))
        commits.extend(project_commits)
    return commits
