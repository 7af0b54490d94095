"""Shared route dependencies."""

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from slotkeeper.database import get_db
from slotkeeper.scheduling.availability import AvailabilityConfig, get_availability


def get_now() -> datetime:
    """Current instant, overridable in tests."""
    return datetime.now(timezone.utc)


async def get_caller_id(x_user_id: Annotated[UUID | None, Header()] = None) -> UUID | None:
    """Identity of the authenticated caller, forwarded by the auth layer."""
    return x_user_id


DBSession = Annotated[AsyncSession, Depends(get_db)]
Availability = Annotated[AvailabilityConfig, Depends(get_availability)]
Now = Annotated[datetime, Depends(get_now)]
CallerId = Annotated[UUID | None, Depends(get_caller_id)]
