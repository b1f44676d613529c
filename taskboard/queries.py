"""Existence checks and joined task reads shared by the resource handlers."""

from typing import Optional

from sqlmodel import Session, select

from taskboard.models import Task, TaskRead, TaskStatus, User


def status_exists(session: Session, status_id: int) -> bool:
    """Return True if a task status with *status_id* exists."""
    statement = select(TaskStatus.id).where(TaskStatus.id == status_id)
    return session.exec(statement).first() is not None


def user_exists(session: Session, user_id: int) -> bool:
    """Return True if a user with *user_id* exists."""
    statement = select(User.id).where(User.id == user_id)
    return session.exec(statement).first() is not None


def _joined_select():
    # Inner join on status (never null), outer join on the optional responsible.
    return (
        select(Task, TaskStatus.name, User.id, User.name)
        .join(TaskStatus, TaskStatus.id == Task.status_id)
        .join(User, User.id == Task.responsible_user_id, isouter=True)
    )


def _to_read(row) -> TaskRead:
    task, status_name, responsible_id, responsible_name = row
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        created_at=task.created_at,
        updated_at=task.updated_at,
        status_id=task.status_id,
        status_name=status_name,
        responsible_id=responsible_id,
        responsible_name=responsible_name,
    )


def get_joined_task(session: Session, task_id: int) -> Optional[TaskRead]:
    """Return the joined record for *task_id*, or None if there is no such task."""
    row = session.exec(_joined_select().where(Task.id == task_id)).first()
    if row is None:
        return None
    return _to_read(row)


def list_joined_tasks(
    session: Session,
    status_id: Optional[int] = None,
    responsible_user_id: Optional[int] = None,
    ascending: bool = False,
) -> list[TaskRead]:
    """List joined records matching every given filter, ordered by creation time.

    Rows created in the same instant keep insertion order via the id tiebreak.
    """
    statement = _joined_select()
    if status_id is not None:
        statement = statement.where(Task.status_id == status_id)
    if responsible_user_id is not None:
        statement = statement.where(Task.responsible_user_id == responsible_user_id)
    if ascending:
        statement = statement.order_by(Task.created_at.asc(), Task.id.asc())
    else:
        statement = statement.order_by(Task.created_at.desc(), Task.id.desc())
    return [_to_read(row) for row in session.exec(statement).all()]
