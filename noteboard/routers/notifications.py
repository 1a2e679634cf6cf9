"""Overdue reminders."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.database import get_db
from noteboard.deps import get_vault
from noteboard.schemas.notification import Notification
from noteboard.services import notification_service
from noteboard.services.secret_service import SecretVault
from noteboard.utils.dates import utcnow

router = APIRouter()


@router.get("/", response_model=list[Notification])
@router.get("", response_model=list[Notification], include_in_schema=False)
async def list_notifications(
    db: AsyncSession = Depends(get_db), vault: SecretVault = Depends(get_vault)
):
    return await notification_service.list_overdue(db, vault, utcnow())
