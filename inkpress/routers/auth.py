from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from inkpress.models.user import User
from inkpress.routers.deps import get_user_service
from inkpress.services.auth import AuthService
from inkpress.services.user import UserService

router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)

def get_auth_service() -> AuthService:
    return AuthService()

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
    users: UserService = Depends(get_user_service),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = auth.decode_token(credentials.credentials)
    return users.upsert(claims)

def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
    users: UserService = Depends(get_user_service),
) -> Optional[User]:
    if credentials is None:
        return None
    try:
        claims = auth.decode_token(credentials.credentials)
    except HTTPException:
        return None
    return users.upsert(claims)

def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user

@router.get("/user", response_model=User)
def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Get the authenticated user.
    """
    return current_user
