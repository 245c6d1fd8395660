# tutordesk/api/dependencies/current_user.py
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.db.session import get_db
from tutordesk.models.user import User
from tutordesk.services.user_service import get_user

logger = logging.getLogger(__name__)


async def get_current_user(
    user_id_header: Optional[str] = Header(
        default=None,
        alias="X-User-Id",
        description="Id of the authenticated tutor, set by the session layer in front of this API.",
    ),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the calling tutor.

    Rules
    -----
    - Header missing or not an integer -> 401.
    - No user with that id              -> 401.
    """
    if not user_id_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated.",
        )

    try:
        user_id = int(user_id_header)
    except ValueError:
        logger.warning("Malformed X-User-Id header: %r", user_id_header)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id.",
        )

    user = await get_user(db, user_id)
    if user is None:
        logger.warning("Unknown user id %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id.",
        )
    return user
