from typing import Iterable, List, Optional

from commit_digest.models.schemas import RawCommit


def filter_by_author(commits: Iterable[RawCommit], author_email: Optional[str]) -> List[RawCommit]:
    """
    Keep commits whose author email matches ``author_email`` case-insensitively.
    An empty filter keeps everything.
    """
    wanted = (author_email or "").strip().lower()
    if not wanted:
        return list(commits)
    return [c for c in commits if c.author_email and c.author_email.lower() == wanted]
