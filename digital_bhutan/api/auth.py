"""
digital_bhutan.api.auth — Email/password login + JWT issuance
==============================================================
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import (
    JWT_ALGORITHM,
    JWT_SECRET,
    get_config,
    get_engine,
    get_session,
    get_token_payload,
)
from digital_bhutan.api.schemas import LoginRequest, RegisterRequest
from digital_bhutan.api.serializers import user_dict
from digital_bhutan.config import PlatformConfig
from digital_bhutan.database.models import User
from digital_bhutan.services import user_service
from digital_bhutan.services.errors import UserNotFound

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])

TOKEN_TTL = timedelta(hours=12)


def issue_token(user: User) -> str:
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "is_admin": user.is_admin,
        "exp": datetime.now(UTC) + TOKEN_TTL,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


@router.post("/register")
def register(
    body: RegisterRequest,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    """Create an account.  Emails listed in ``admin_emails`` become admins."""
    user = user_service.register_user(
        engine,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        password=body.password,
        profile_image_url=body.profile_image_url,
        admin_emails=cfg.admin_emails,
    )
    return user_dict(user)


@router.post("/login")
def login(body: LoginRequest, engine=Depends(get_engine)):
    """Exchange email + password for a 12-hour bearer token."""
    user = user_service.authenticate(engine, body.email, body.password)
    if user is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")
    return {"user": user_dict(user), "token": issue_token(user)}


@router.get("/me")
def me(
    payload: dict = Depends(get_token_payload),
    session: Session = Depends(get_session),
):
    """Return the authenticated user's profile."""
    user = user_service.get_user(session, int(payload["sub"]))
    if user is None:
        raise UserNotFound(int(payload["sub"]))
    return user_dict(user)
