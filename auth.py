"""
Token issuing and role checks

Guests get the ``guest`` role, staff get ``admin`` when their position is
administrator and ``worker`` otherwise.
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from dotenv import load_dotenv
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

load_dotenv()

logger = logging.getLogger(__name__)

SECRET_KEY = os.getenv("JWT_SECRET", "tastify-development-secret-key-change-me")
ALGORITHM = "HS256"
PASSWORD_MAX_BYTES = 72
EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", 7))

ROLE_ADMIN = "admin"
ROLE_WORKER = "worker"
ROLE_GUEST = "guest"

ADMIN_POSITION = "administrator"

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    # bcrypt refuses these, no stored password can match
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def staff_role(position: str) -> str:
    return ROLE_ADMIN if position.strip().lower() == ADMIN_POSITION else ROLE_WORKER


def create_access_token(user_id: str, name: str, role: str, email: Optional[str] = None) -> str:
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": user_id,
        "name": name,
        "role": role,
        "iat": now,
        "exp": now + timedelta(days=EXPIRE_DAYS),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def guest_token(guest: Dict[str, Any]) -> str:
    return create_access_token(guest["id"], guest["name"], ROLE_GUEST, guest.get("email"))


def staff_token(staff: Dict[str, Any]) -> str:
    return create_access_token(staff["id"], staff["name"], staff_role(staff["position"]))


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> Dict[str, Any]:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})
    try:
        return jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token", headers={"WWW-Authenticate": "Bearer"})


def require_roles(*roles: str):
    """Dependency allowing only tokens carrying one of ``roles``."""

    def checker(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if user.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Not enough permissions")
        return user

    return checker


admin_only = require_roles(ROLE_ADMIN)
staff_only = require_roles(ROLE_WORKER, ROLE_ADMIN)
guest_only = require_roles(ROLE_GUEST)
guest_or_admin = require_roles(ROLE_GUEST, ROLE_ADMIN)
anyone = require_roles(ROLE_WORKER, ROLE_ADMIN, ROLE_GUEST)
