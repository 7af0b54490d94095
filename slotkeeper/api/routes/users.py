"""User routes - API endpoints for user operations."""

from fastapi import APIRouter, HTTPException
from uuid import UUID

from slotkeeper.api.deps import DBSession
from slotkeeper.schemas.user import UserCreate, UserResponse
from slotkeeper.services.user_service import UserService

router = APIRouter()


@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(user_data: UserCreate, db: DBSession):
    """Create a new user."""
    service = UserService(db)

    # Check if user with email already exists
    existing = await service.get_user_by_email(user_data.email)
    if existing:
        raise HTTPException(status_code=400, detail="User with this email already exists")

    return await service.create_user(user_data)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, db: DBSession):
    """Get a user by ID."""
    service = UserService(db)
    user = await service.get_user_by_id(user_id)

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return user
