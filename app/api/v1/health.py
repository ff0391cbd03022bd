"""Versioned liveness endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/ping")
async def ping() -> dict[str, str]:
    """Cheap liveness probe under the API prefix; never touches the database."""
    return {"ping": "pong", "service": "user-directory-service"}
