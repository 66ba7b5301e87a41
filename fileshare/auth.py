# Filename: fileshare/auth.py
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from fastapi import HTTPException, status, Request
from typing import Optional

from .config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ALGORITHM = settings.jwt_algorithm
SECRET_KEY = settings.secret_key
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes
ADMIN_SUBJECT = "admin"

# hashed once at import; the plain value only lives in settings
MANAGE_PASSWORD_HASH = pwd_context.hash(settings.manage_password)


def verify_manage_password(plain_password: str) -> bool:
    return pwd_context.verify(plain_password, MANAGE_PASSWORD_HASH)


def create_access_token(subject: str = ADMIN_SUBJECT, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(subject), "exp": int(expire.timestamp()), "iat": int(now.timestamp())}
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def _get_token_from_header_or_cookie(request: Request) -> Optional[str]:
    """
    If Authorization header present: return token (raw token or "Bearer ...")
    Else if cookie "access_token" present: return that (we support both raw token or "Bearer ...")
    """
    auth_header = request.headers.get("authorization")
    if auth_header:
        return auth_header
    cookie = request.cookies.get("access_token")
    if cookie:
        return cookie
    return None


def get_current_admin(request: Request) -> str:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token_raw = _get_token_from_header_or_cookie(request)
    if not token_raw:
        raise credentials_exception

    # token may be "Bearer <token>" or just "<token>"
    if token_raw.lower().startswith("bearer "):
        token = token_raw.split(" ", 1)[1]
    else:
        token = token_raw

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception

    subject: Optional[str] = payload.get("sub")
    if subject != ADMIN_SUBJECT:
        raise credentials_exception
    return subject
