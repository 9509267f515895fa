"""Auth Routes — login, logout, current session.

Invariants:
    - Login never checks the password (trusted demo auth)
    - GET /session with no session → 404 RESOURCE_NOT_FOUND envelope
"""

from fastapi import APIRouter, Depends, Response, status

from sitebook.api.dependencies import get_store
from sitebook.core.errors import ResourceNotFoundError
from sitebook.schemas.auth import LoginRequest
from sitebook.services import session_gateway
from sitebook.services.entity_store import EntityStore

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, store: EntityStore = Depends(get_store)):
    session = await session_gateway.login(store, body.username, body.password)
    return session.to_dict()


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(store: EntityStore = Depends(get_store)):
    await session_gateway.logout(store)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session")
async def current_session(store: EntityStore = Depends(get_store)):
    session = await session_gateway.get_current_session(store)
    if session is None:
        raise ResourceNotFoundError("Session", "current")
    return session.to_dict()
