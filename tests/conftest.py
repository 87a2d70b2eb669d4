from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from commit_digest.core.config import get_settings

API = "https://gitlab.com/api/v4"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, reason: str = "OK", text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self._text = text

    def json(self) -> Any:
        if self._text is not None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Answers GET requests by URL path; records every call."""

    def __init__(self, routes: Dict[str, Any]) -> None:
        self.routes = routes
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        path = url[len(API):] if url.startswith(API) else url
        answer = self.routes[path]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, FakeResponse):
            return answer
        return FakeResponse(payload=answer)

    @property
    def paths(self) -> List[str]:
        return [c["url"][len(API):] for c in self.calls]


def gl_commit(title: str, created_at: str, email: Optional[str] = "dev@example.com") -> Dict[str, Any]:
    return {"id": title, "title": title, "created_at": created_at, "author_email": email}


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("GITLAB_API_URL", "REQUEST_TIMEOUT", "MAX_WORKERS", "GROUP_BY", "DISPLAY_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
