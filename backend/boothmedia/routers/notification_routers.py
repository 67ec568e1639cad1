# backend/boothmedia/routers/notification_routers.py
from typing import List

from fastapi import APIRouter

from ..dependencies import RuntimeDep
from ..models.notification_model import Notification

router = APIRouter()


@router.get(
    "/notifications",
    response_model=List[Notification],
    response_model_by_alias=True,
)
async def list_notifications(runtime: RuntimeDep):
    """Get current job notifications, newest first"""
    return runtime.registry.list()
