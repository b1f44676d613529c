"""Table models and request/response schemas for the task board API."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

DEFAULT_STATUS_ID = 1

STATUSES = (
    (1, "New"),
    (2, "In Progress"),
    (3, "Ready for Review"),
    (4, "Needs Adjustment"),
    (5, "Done"),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Users table. Rows are created through the API and never modified."""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class TaskStatus(SQLModel, table=True):
    """Reference table seeded from :data:`STATUSES`."""
    __tablename__ = "task_statuses"

    id: int = Field(primary_key=True)
    name: str


class Task(SQLModel, table=True):
    """Tasks table."""
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = Field(default=None)
    responsible_user_id: Optional[int] = Field(default=None, foreign_key="users.id")
    status_id: int = Field(default=DEFAULT_STATUS_ID, foreign_key="task_statuses.id")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class TaskCreate(SQLModel):
    """Body of ``POST /tasks``.

    Every field is optional at the schema level so a blank or missing title
    is reported by the handler as a 400 rather than a schema error.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    responsible_user_id: Optional[int] = None
    status_id: Optional[int] = None


class TaskUpdate(SQLModel):
    """Body of ``PUT /tasks/{id}``.

    Fields left out of the request are absent from ``model_fields_set``;
    fields sent as null are present with value ``None``.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    responsible_user_id: Optional[int] = None
    status_id: Optional[int] = None


class TaskRead(SQLModel):
    """Task joined with its status name and responsible user name."""
    id: int
    title: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    status_id: int
    status_name: str
    responsible_id: Optional[int] = None
    responsible_name: Optional[str] = None


class UserCreate(SQLModel):
    name: Optional[str] = None
    email: Optional[str] = None


class UserRead(SQLModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class StatusRead(SQLModel):
    id: int
    name: str
