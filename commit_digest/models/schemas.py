from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    username: Optional[str] = None
    # 토큰은 로그에 남기지 않음
    token: Optional[str] = Field(default=None, repr=False)


class DateWindow(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class Project(BaseModel):
    id: int
    name: str


class RawCommit(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_id: int
    project_name: str
    author_email: Optional[str] = None
    created_at: datetime
    title: str = ""


class DisplayRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    date: str
    time: str
    project_name: str = Field(alias="projectName")
    commits: str


class AggregateRequest(BaseModel):
    username: Optional[str] = None
    token: Optional[str] = None
    email: Optional[str] = None
    since: Optional[datetime] = None
    until: Optional[datetime] = None

    def credentials(self) -> Credentials:
        return Credentials(username=self.username, token=self.token)

    def window(self) -> DateWindow:
        return DateWindow(start=self.since, end=self.until)
