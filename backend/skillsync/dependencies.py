from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from skillsync.database import get_db
from skillsync.models.enums import Role
from skillsync.models.user import User
from skillsync.utils.security import InvalidTokenError, decode_access_token


@dataclass(frozen=True)
class Identity:
    """Who is making the request, as verified from their bearer token."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def can_manage(self, owner_id: str | None) -> bool:
        return self.is_admin or (owner_id is not None and owner_id == self.user_id)


def _extract_token(x_auth_token: str | None, authorization: str | None) -> str | None:
    raw = x_auth_token or authorization
    if not raw:
        return None
    raw = raw.strip()
    if raw.startswith("Bearer "):
        raw = raw[7:].strip()
    return raw or None


async def get_identity(
    request: Request,
    x_auth_token: str | None = Header(None),
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
) -> Identity:
    token = _extract_token(x_auth_token, authorization)
    if token is None:
        raise HTTPException(status_code=401, detail="No token, authorization denied")
    try:
        user_id = decode_access_token(token)
    except InvalidTokenError:
        raise HTTPException(status_code=401, detail="Token is not valid")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="Token is not valid")

    identity = Identity(user_id=user.id, role=user.role)
    request.state.identity = identity
    return identity


async def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return identity


def require_role(*roles: Role):
    async def _check(identity: Identity = Depends(get_identity)) -> Identity:
        if identity.role not in roles:
            allowed = " or ".join(r.value for r in roles)
            raise HTTPException(status_code=403, detail=f"Only a {allowed} can do this")
        return identity

    return _check


require_recruiter = require_role(Role.RECRUITER, Role.ADMIN)
require_candidate = require_role(Role.CANDIDATE)
