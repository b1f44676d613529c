"""Read-only task status reference data."""

from fastapi import APIRouter

from taskboard.models import STATUSES, StatusRead

router = APIRouter(prefix="/statuses", tags=["statuses"])


@router.get("")
def list_statuses() -> list[StatusRead]:
    return [StatusRead(id=status_id, name=name) for status_id, name in STATUSES]
