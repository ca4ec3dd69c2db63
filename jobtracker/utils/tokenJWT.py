# jobtracker/utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError

from jobtracker.config import settings
from jobtracker.models.users import User, UserRole
from jobtracker.schemas.user import TokenData

logger = logging.getLogger(__name__)

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

# Authorization scheme; missing header is reported by get_current_user itself
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a signed access token carrying the user's role scoped identity
def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = {
        "sub": user.email,
        "user_id": user.id,
        "email": user.email,
        "role": user.role,
    }
    if user.role == UserRole.CLIENT.value and user.party_name:
        to_encode["party_name"] = user.party_name
    elif user.role == UserRole.VENDOR.value and user.transporter_name:
        to_encode["transporter_name"] = user.transporter_name

    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

# Decode and validate a token; None means the caller is unauthenticated
def verify_access_token(token: str) -> Optional[TokenData]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return TokenData(**payload)
    except (JWTError, ValidationError, TypeError):
        return None

# Retrieve the identity of the caller from the bearer token
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenData:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = verify_access_token(credentials.credentials)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity

# Dependency factory for Role-Based Access Control
def role_required(*allowed_roles):
    allowed = {getattr(r, "value", r) for r in allowed_roles}

    def _checker(current_user: TokenData = Depends(get_current_user)) -> TokenData:
        if allowed and current_user.role not in allowed:
            logger.warning("Role %s denied, requires one of %s", current_user.role, sorted(allowed))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions"
            )
        return current_user
    return _checker
