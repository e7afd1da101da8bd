# ============================================================================
# FILE: app/api/dependencies.py
# Authentication dependencies for identity-provider JWTs
# ============================================================================
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
from jose import JWTError, jwt
from uuid import UUID
import logging

from app.config.database import get_db
from app.config.settings import get_settings
from app.core.context import RequestContext
from app.core.exceptions import DataUnavailable
from app.models.user import User

logger = logging.getLogger(__name__)

# ============================================================================
# Security Schemes
# ============================================================================

jwt_security = HTTPBearer(
    scheme_name="JWT Bearer Token",
    description="Access token issued by the identity provider"
)

optional_jwt_security = HTTPBearer(auto_error=False)


# ============================================================================
# JWT Token Functions
# ============================================================================

def verify_access_token(token: str) -> dict:
    """
    Verify and decode an access token issued by the identity provider.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Could not validate credentials: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )


def _user_from_payload(db: Session, payload: dict) -> User:
    """Load the profile for a verified token, creating it on first sight"""
    user_id_str: Optional[str] = payload.get("sub")
    if user_id_str is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID in token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user = db.query(User).filter(User.id == user_id).first()
        if user is not None:
            return user

        email = payload.get("email")
        if not email:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found",
                headers={"WWW-Authenticate": "Bearer"},
            )

        metadata = payload.get("user_metadata") or {}
        user = User(id=user_id, email=email, full_name=metadata.get("name"), is_admin=False)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Created profile for {email}")
        return user
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to load profile {user_id}: {e}")
        raise DataUnavailable("Unable to load your profile, please try again") from e


def _build_context(request: Request, user: User) -> RequestContext:
    return RequestContext(
        user_id=user.id,
        email=user.email,
        is_admin=bool(user.is_admin),
        correlation_id=getattr(request.state, "correlation_id", None),
    )


# ============================================================================
# Request Context Dependencies
# ============================================================================

async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(jwt_security),
        db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user from the access token.

    Raises:
        HTTPException 401: If token is invalid or user not found
    """
    payload = verify_access_token(credentials.credentials)
    return _user_from_payload(db, payload)


async def get_request_context(
        request: Request,
        current_user: User = Depends(get_current_user)
) -> RequestContext:
    """
    Dependency that hands route handlers an explicit caller context.

    Usage in routes:
        @router.get("/bookings/upcoming")
        async def upcoming(context: RequestContext = Depends(get_request_context)):
            ...
    """
    return _build_context(request, current_user)


async def optional_request_context(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_jwt_security),
        db: Session = Depends(get_db)
) -> Optional[RequestContext]:
    """
    Optional authentication dependency.
    Returns a context if a token was sent, None for anonymous callers.
    A token that is sent but invalid is still rejected.
    """
    if not credentials:
        return None

    payload = verify_access_token(credentials.credentials)
    return _build_context(request, _user_from_payload(db, payload))


async def require_admin(
        context: RequestContext = Depends(get_request_context)
) -> RequestContext:
    """
    Dependency that requires the caller to be studio staff.
    Used for schedule management routes.
    """
    if not context.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required"
        )

    return context
