from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from datetime import timedelta
from typing import Optional
from pydantic import ValidationError
from question_bank.config import settings
from question_bank.database import Database, get_db
from question_bank.models import User
from question_bank.utils.time_utils import get_utc_time
import httpx
import jwt
import logging

security = HTTPBearer(auto_error=False)

CONNECTION_FAILED_MESSAGE = "Falha ao conectar com o servidor."
USER_NOT_FOUND_MESSAGE = "Usuário não encontrado."

class DirectoryUnavailableError(Exception):
    """The remote user list could not be reached or answered non-2xx"""

class UserNotFoundError(Exception):
    """No user with the given email exists in the remote user list"""

def principal_from_record(record: dict) -> User:
    """Adapt a remote user record; the service returns numeric ids, we keep strings"""
    data = dict(record)
    if data.get("id") is not None:
        data["id"] = str(data["id"])
    return User.model_validate(data)

class UserDirectory:
    """Read-only lookup against the remote users endpoint"""

    def __init__(self, base_url: str = None, timeout: float = None, transport: httpx.AsyncBaseTransport = None):
        self.base_url = base_url or settings.users_endpoint
        self.timeout = timeout if timeout is not None else settings.users_endpoint_timeout
        self.transport = transport

    async def find_by_email(self, email: str) -> User:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.base_url, params={"email": email})
        except httpx.HTTPError as e:
            logging.error(f"User directory request failed: {e}")
            raise DirectoryUnavailableError(CONNECTION_FAILED_MESSAGE) from e

        if not response.is_success:
            logging.error(f"User directory answered {response.status_code} for {email}")
            raise DirectoryUnavailableError(CONNECTION_FAILED_MESSAGE)

        try:
            users = response.json()
            if not isinstance(users, list):
                raise ValueError(f"expected a list of users, got {type(users).__name__}")
            if not users:
                raise UserNotFoundError(USER_NOT_FOUND_MESSAGE)
            return principal_from_record(users[0])
        except (ValidationError, ValueError, KeyError, TypeError) as e:
            logging.error(f"User directory returned an unusable record for {email}: {e}")
            raise DirectoryUnavailableError(CONNECTION_FAILED_MESSAGE) from e

def get_user_directory() -> UserDirectory:
    return UserDirectory()

def create_access_token(user: User) -> str:
    """Signed token carrying the principal"""
    now = get_utc_time()
    payload = {
        "sub": user.id,
        "user": user.model_dump(),
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret.get_secret_value(), algorithm=settings.jwt_algorithm)

def verify_token(token: str) -> Optional[User]:
    """Decode a bearer token; None when it is invalid or expired"""
    try:
        payload = jwt.decode(token, settings.jwt_secret.get_secret_value(), algorithms=[settings.jwt_algorithm])
        return User.model_validate(payload["user"])
    except (jwt.PyJWTError, KeyError, ValidationError) as e:
        logging.error(f"Token verification failed: {e}")
        return None

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Database = Depends(get_db),
) -> User:
    """Get the principal from the bearer token; it must still be the signed-in user"""
    if credentials:
        user = verify_token(credentials.credentials)
        signed_in = db.get_current_user()
        if user and signed_in and signed_in.get("id") == user.id:
            return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

async def require_coordinator(current_user: User = Depends(get_current_user)) -> User:
    """Only coordinators may use the admin panel"""
    if not current_user.is_coordinator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Coordinator privileges required"
        )
    return current_user
