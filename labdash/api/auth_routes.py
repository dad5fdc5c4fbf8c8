"""Authentication and user endpoints.

    POST /api/auth/register  — create an account (admin role with a valid admin code)
    POST /api/auth/login     — authenticate and receive a session token
    GET  /api/auth/me        — the caller's identity
    GET  /api/auth/users     — list accounts (admin only)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_admin, require_auth
from ..core.config import settings
from ..core.token_factory import create_token
from ..database import get_db
from ..exceptions import ValidationError
from ..services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password (min 8 characters)")
    confirm_password: str
    admin_code: Optional[str] = Field(None, description="Grants the admin role when it matches")

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "name": "Alice",
                "email": "alice@lab.example",
                "password": "securepass",
                "confirm_password": "securepass",
            }]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    is_active: bool = True

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


@router.post("/register", response_model=UserResponse, status_code=201, summary="Register a new user")
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    if body.password != body.confirm_password:
        raise ValidationError("Passwords do not match", field="confirm_password")
    return auth_service.register_user(db, body.name, body.email, body.password, body.admin_code)


@router.post("/login", response_model=LoginResponse, summary="Authenticate and receive a session token")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, body.email, body.password)
    token = create_token(
        subject=user.id,
        role=user.role,
        secret=settings.jwt_secret_key,
        email=user.email,
        name=user.name,
        algorithm=settings.jwt_algorithm,
        expires_hours=settings.token_expire_hours,
    )
    return LoginResponse(
        token=token,
        user=UserResponse(id=user.id, name=user.name, email=user.email, role=user.role),
    )


@router.get("/me", response_model=UserResponse, summary="Current user")
def get_me(auth: AuthContext = Depends(require_auth)):
    return UserResponse(id=auth.user_id, name=auth.name, email=auth.email, role=auth.role)


@router.get("/users", response_model=List[UserResponse], summary="List all users (admin only)")
def list_users(
    auth: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return auth_service.list_users(db)
