"""Requester resolution from bearer tokens issued by the auth service"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from reserva.config import settings

# Token issuance lives in the auth service; the URL is only advertised in OpenAPI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


class Requester(BaseModel):
    """Already-authenticated caller of the booking API"""
    user_id: UUID
    email: Optional[str] = None


def create_access_token(user_id: UUID, email: Optional[str] = None) -> str:
    """Create JWT access token (development seeding and tests)"""
    expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


async def get_requester(token: str = Depends(oauth2_scheme)) -> Requester:
    """Resolve the current requester from the access token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
        user_id: str = payload.get("sub")
        token_type: str = payload.get("type")

        if user_id is None or token_type != "access":
            raise credentials_exception
        return Requester(user_id=UUID(user_id), email=payload.get("email"))
    except (JWTError, ValueError):
        raise credentials_exception


def verify_reservation_owner(reservation, requester: Requester) -> None:
    """Only the user who booked may read or change a reservation"""
    if reservation.user_id != requester.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this reservation",
        )


def verify_business_owner(business, requester: Requester) -> None:
    """Only the owner of a business may list the reservations made there"""
    if business.owner_id != requester.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this business",
        )
