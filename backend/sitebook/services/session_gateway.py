"""Session Gateway — creates, reads and destroys the single current session.

Invariants:
    - At most one session exists; login replaces it wholesale
    - Every login succeeds for a non-empty username, role is always Admin
    - Token is freshly generated per login
    - logout is idempotent

Design Decisions:
    - Auth-agnostic: the password is accepted for interface compatibility and
      never inspected. The gateway trusts its caller entirely; real credential
      checks belong to an external collaborator
"""

import logging
import uuid

from sitebook.core.domain_types import UserRole
from sitebook.core.records import UserSession
from sitebook.core.repository_protocols import EntityStoreLike
from sitebook.schemas.auth import LoginRequest
from sitebook.schemas.parsing import parse_input

logger = logging.getLogger(__name__)


async def login(
    store: EntityStoreLike, username: str, password: str | None = None,
) -> UserSession:
    """Open a session for username, replacing any existing one."""
    request = parse_input(
        LoginRequest, {"username": username, "password": password},
    )
    session = UserSession(
        id=f"u_{uuid.uuid4().hex[:12]}",
        username=request.username,
        role=UserRole.ADMIN,
        token=f"session-{uuid.uuid4().hex}",
    )
    await store.put_session(session)
    logger.info("Signed in", extra={"username": session.username})
    return session


async def logout(store: EntityStoreLike) -> None:
    await store.delete_session()
    logger.info("Signed out")


async def get_current_session(store: EntityStoreLike) -> UserSession | None:
    return await store.get_session()
