"""
Group raw commits into per-day, per-project display rows.
"""

from datetime import date, datetime, timezone
from typing import Dict, Hashable, Iterable, List, Tuple
from zoneinfo import ZoneInfo

from commit_digest.models.schemas import DisplayRow, RawCommit

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M"
GROUP_POLICIES = ("name", "id")


def commit_day(created_at: datetime, display_timezone: str = "UTC") -> date:
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.astimezone(ZoneInfo(display_timezone)).date()


def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def format_time(created_at: datetime) -> str:
    # 시간은 항상 UTC 기준
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc)
    return created_at.strftime(TIME_FORMAT)


def group_commits(
    commits: Iterable[RawCommit],
    group_by: str = "name",
    display_timezone: str = "UTC",
) -> List[DisplayRow]:
    """
    Merge commits sharing a (day, project) key into one row.

    Rows come out in first-seen order with ids 1..n. A row keeps the date,
    time and project name of the first commit that opened it; later commits
    only contribute their titles. ``group_by="id"`` keys on the project id
    instead of its name so same-named projects stay apart.
    """
    if group_by not in GROUP_POLICIES:
        raise ValueError(f"group_by must be one of {GROUP_POLICIES}, got {group_by!r}")

    # dict는 삽입 순서를 유지하므로 first-seen 순서가 그대로 보존됨
    groups: Dict[Tuple[date, Hashable], Dict] = {}
    for commit in commits:
        day = commit_day(commit.created_at, display_timezone)
        project_key = commit.project_id if group_by == "id" else commit.project_name
        key = (day, project_key)
        group = groups.get(key)
        if group is None:
            groups[key] = {
                "date": format_date(day),
                "time": format_time(commit.created_at),
                "project_name": commit.project_name,
                "commits": [commit.title],
            }
        else:
            group["commits"].append(commit.title)

    return [
        DisplayRow(
            id=i,
            date=g["date"],
            time=g["time"],
            project_name=g["project_name"],
            commits=", ".join(g["commits"]),
        )
        for i, g in enumerate(groups.values(), start=1)
    ]
