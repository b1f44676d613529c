"""CRUD endpoints for tasks."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from taskboard.database import get_session
from taskboard.errors import NotFoundError, ValidationError
from taskboard.models import DEFAULT_STATUS_ID, Task, TaskCreate, TaskRead, TaskUpdate
from taskboard.queries import get_joined_task, list_joined_tasks, status_exists, user_exists

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

BLANK_TITLE = "Title is required and cannot be blank"
INVALID_STATUS = "Invalid status_id"
INVALID_RESPONSIBLE = "Invalid responsible_user_id (user does not exist)"


def _joined_or_404(session: Session, task_id: int) -> TaskRead:
    task = get_joined_task(session, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def _id_filter(name: str, value: Optional[str]) -> Optional[int]:
    """Parse an integer query filter; a blank value means no filter."""
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer") from exc


@router.get("")
def list_tasks(
    status_id: Optional[str] = None,
    responsible_user_id: Optional[str] = None,
    order: str = "desc",
    session: Session = Depends(get_session),
) -> list[TaskRead]:
    """List tasks, optionally filtered by status and/or responsible user.

    ``order=asc`` sorts oldest first; anything else sorts newest first.
    """
    return list_joined_tasks(
        session,
        status_id=_id_filter("status_id", status_id),
        responsible_user_id=_id_filter("responsible_user_id", responsible_user_id),
        ascending=order.strip().lower() == "asc",
    )


@router.get("/{task_id}")
def get_task(task_id: int, session: Session = Depends(get_session)) -> TaskRead:
    """Get a single task by ID."""
    return _joined_or_404(session, task_id)


@router.post("", status_code=201)
def create_task(
    body: Optional[TaskCreate] = None, session: Session = Depends(get_session)
) -> TaskRead:
    """Create a task. Status defaults to New when absent or null."""
    if body is None:
        body = TaskCreate()
    title = (body.title or "").strip()
    if not title:
        raise ValidationError(BLANK_TITLE)

    status_id = body.status_id if body.status_id is not None else DEFAULT_STATUS_ID
    if not status_exists(session, status_id):
        raise ValidationError(INVALID_STATUS)

    if body.responsible_user_id is not None and not user_exists(session, body.responsible_user_id):
        raise ValidationError(INVALID_RESPONSIBLE)

    task = Task(
        title=title,
        description=body.description,
        responsible_user_id=body.responsible_user_id,
        status_id=status_id,
    )
    session.add(task)
    session.commit()
    session.refresh(task)
    logger.info("Created task %s (status=%s)", task.id, task.status_id)
    return _joined_or_404(session, task.id)


@router.put("/{task_id}")
def update_task(
    task_id: int, body: TaskUpdate, session: Session = Depends(get_session)
) -> TaskRead:
    """Update an existing task. Only provided fields are changed.

    ``description`` and ``responsible_user_id`` sent as null are cleared;
    ``status_id`` sent as null keeps the current status.
    """
    task = session.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task not found")

    sent = body.model_fields_set

    if "title" in sent and not (body.title or "").strip():
        raise ValidationError(BLANK_TITLE)
    if "status_id" in sent and body.status_id is not None:
        if not status_exists(session, body.status_id):
            raise ValidationError(INVALID_STATUS)
    if "responsible_user_id" in sent and body.responsible_user_id is not None:
        if not user_exists(session, body.responsible_user_id):
            raise ValidationError(INVALID_RESPONSIBLE)

    if "title" in sent:
        task.title = body.title.strip()
    if "description" in sent:
        task.description = body.description
    if "responsible_user_id" in sent:
        task.responsible_user_id = body.responsible_user_id
    if body.status_id is not None:
        task.status_id = body.status_id
    task.updated_at = datetime.now(timezone.utc)

    session.add(task)
    session.commit()
    logger.info("Updated task %s (fields=%s)", task_id, sorted(sent))
    return _joined_or_404(session, task_id)


@router.delete("/{task_id}")
def delete_task(task_id: int, session: Session = Depends(get_session)) -> dict:
    """Delete a task by ID."""
    task = session.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    session.delete(task)
    session.commit()
    logger.info("Deleted task %s", task_id)
    return {"message": "Task deleted"}
