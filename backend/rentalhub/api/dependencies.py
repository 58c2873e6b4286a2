# rentalhub/api/dependencies.py
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.core.security import verify_access_token
from rentalhub.db import crud_users
from rentalhub.db.session import get_db
from rentalhub.schemas.auth import Principal

logger = logging.getLogger("uvicorn.error")
security = HTTPBearer(auto_error=False)


async def get_current_principal(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Principal:
    """
    Resolve `Authorization: Bearer <token>` into the caller's id and role.
    Tokens are issued by the auth service; here they are only verified.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    try:
        payload = verify_access_token(credentials.credentials)
    except JWTError:
        logger.info("rejected bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    try:
        uid = int(payload.get("user_id"))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token user id"
        )

    user = await crud_users.get_user(db, uid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found"
        )
    return Principal(user_id=user.id, role=user.role)


def require_role(*roles: str):
    """
    Dependency factory:
      principal = Depends(require_role("customer"))
    Admin passes every role check.
    """

    async def dep(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles and principal.role != "admin":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
            )
        return principal

    return dep
