"""Authentication API endpoints.

Login lives on ``POST /users/login``. This router only exposes token
introspection.
"""

from fastapi import APIRouter

from app.auth.dependencies import CurrentUser
from app.schemas.auth import TokenUser

router = APIRouter()


@router.get("/me", response_model=TokenUser)
async def get_current_user_info(current_user: CurrentUser) -> TokenUser:
    """Return the authenticated caller as described by their token."""
    return current_user
