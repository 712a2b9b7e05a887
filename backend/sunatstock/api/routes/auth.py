"""Auth: placeholder login for the clinic dashboard.

The credential check is plaintext equality and the token is unsigned
(see core.security). Good enough for a single-clinic LAN deployment only.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from sunatstock.api.deps import get_db, get_current_user
from sunatstock.core.audit import AuditLog
from sunatstock.core.exceptions import BusinessError
from sunatstock.models.user import User
from sunatstock.schemas.auth import LoginRequest, LoginResponse, UserResponse
from sunatstock.services.auth_service import login_user

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    Login and return the user with a session token.

    Generic error message on failure to prevent user enumeration.
    """
    client_ip = request.client.host if request.client else "unknown"
    result = login_user(db, data.username, data.password)
    if result is None:
        AuditLog.log_authentication("failed_login", data.username, client_ip, False, reason="Invalid credentials")
        raise BusinessError.unauthorized(f"failed login for {data.username}")

    AuditLog.log_authentication("login", data.username, client_ip, True)
    return LoginResponse(user=UserResponse.model_validate(result["user"]), token=result["token"])


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return current_user
