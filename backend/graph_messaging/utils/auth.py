from datetime import datetime, timedelta
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from graph_messaging.utils.identifiers import is_valid_id
import os
import logging

# ---------------------------------------------------------------------------
# Logger setup – using module namespace helps identify origin in aggregated logs
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

SECRET_KEY = os.getenv("SECRET_KEY", "testing_secret_key_for_development_only")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    """Issue an access token whose subject is the user's node id"""
    expire = datetime.utcnow() + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": user_id, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def _resolve_subject(token: str) -> str:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if payload.get("type") != "access" or not is_valid_id(user_id):
        logger.debug("Rejected token with subject: %s", user_id)
        raise credentials_exception
    return user_id.lower()

async def get_current_user_id(credentials: HTTPAuthorizationCredentials = Depends(security)) -> str:
    return _resolve_subject(credentials.credentials)

async def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[str]:
    """Like get_current_user_id, but a request without a bearer token resolves to None"""
    if credentials is None:
        return None
    return _resolve_subject(credentials.credentials)
