"""
FastAPI Dependencies

Shared dependencies for dependency injection.
"""

from typing import Annotated, Optional
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from barangay.database import RowStore, get_store
from barangay.identity import IdentityGateway
from barangay.models import User
from barangay.resources import ResourceList
from .config import Settings, get_settings


bearer_scheme = HTTPBearer(auto_error=False)


def get_row_store(
    settings: Annotated[Settings, Depends(get_settings)]
) -> RowStore:
    """
    Get the cached RowStore for the configured database.

    This is created once per database URL and reused for all requests.
    """
    try:
        return get_store(settings.database_url)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to connect to database: {str(e)}"
        )


def get_identity(
    store: Annotated[RowStore, Depends(get_row_store)],
    settings: Annotated[Settings, Depends(get_settings)]
) -> IdentityGateway:
    return IdentityGateway(store, session_timeout_minutes=settings.session_timeout_minutes)


def get_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_current_user(
    token: Annotated[Optional[str], Depends(get_token)],
    identity: Annotated[IdentityGateway, Depends(get_identity)]
) -> User:
    """
    Resolve the signed-in user, or reject the request.

    Every route outside /auth depends on this.
    """
    user = identity.get_current_user(token)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Sign in at /auth/sign-in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def resource_list(collection: str):
    """
    Dependency factory for a collection's ResourceList.

    A fresh list is built per request; nothing is cached between requests.
    """
    def _dependency(store: Annotated[RowStore, Depends(get_row_store)]) -> ResourceList:
        return ResourceList(store, collection)

    return _dependency


CurrentUser = Annotated[User, Depends(get_current_user)]
