"""
digital_bhutan.services.user_service — Accounts & Credentials
==============================================================

Registration, password hashing (PBKDF2-SHA256) and credential checks.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import os
import secrets
import string
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import User
from digital_bhutan.services.errors import EmailAlreadyRegistered, UserNotFound

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 310_000
_BASE36 = string.digits + string.ascii_lowercase


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------
def _b64u_encode(v: bytes) -> str:
    return base64.urlsafe_b64encode(v).decode("ascii").rstrip("=")


def _b64u_decode(v: str) -> bytes:
    return base64.urlsafe_b64decode(v + "=" * (-len(v) % 4))


def hash_password(password: str, *, iterations: int | None = None) -> str:
    iterations = iterations or PBKDF2_ITERATIONS
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations, dklen=32)
    return f"pbkdf2_sha256${iterations}${_b64u_encode(salt)}${_b64u_encode(dk)}"


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of *password* against a stored hash.

    Malformed or foreign hashes simply fail verification.
    """
    try:
        algo, iter_s, salt_b64, hash_b64 = str(password_hash or "").split("$", 3)
        if algo != "pbkdf2_sha256":
            return False
        iterations = int(iter_s)
        salt = _b64u_decode(salt_b64)
        expected = _b64u_decode(hash_b64)
    except ValueError:
        return False
    actual = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt, iterations, dklen=len(expected)
    )
    return hmac.compare_digest(actual, expected)


# ---------------------------------------------------------------------------
# Mock token ids
# ---------------------------------------------------------------------------
def mock_token_id(prefix: str = "nft") -> str:
    """``<prefix>_<epoch ms>_<9 base36 chars>`` placeholder token id."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(session: Session, user_id: int) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.scalar(
        select(User).where(func.lower(User.email) == normalize_email(email))
    )


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def register_user(
    engine: Engine,
    *,
    email: str,
    first_name: str,
    last_name: str,
    password: str,
    profile_image_url: str | None = None,
    admin_emails: Iterable[str] = (),
) -> User:
    """Create a new account.

    Raises :class:`EmailAlreadyRegistered` if the email is taken; the
    unique constraint backs up the explicit check when two registrations
    race.
    """
    email = normalize_email(email)
    is_admin = email in {normalize_email(e) for e in admin_emails}

    try:
        with get_session(engine) as session:
            if get_user_by_email(session, email) is not None:
                raise EmailAlreadyRegistered(email)
            user = User(
                email=email,
                first_name=first_name,
                last_name=last_name,
                password=hash_password(password),
                profile_image_url=profile_image_url,
                is_admin=is_admin,
                nft_id=mock_token_id("nft"),
            )
            session.add(user)
            session.flush()
            session.refresh(user)
    except IntegrityError as exc:
        raise EmailAlreadyRegistered(email) from exc

    logger.info("Registered user %d (admin=%s)", user.id, is_admin)
    return user


def authenticate(engine: Engine, email: str, password: str) -> User | None:
    """Return the user for valid credentials, ``None`` otherwise."""
    with Session(engine, expire_on_commit=False) as session:
        user = get_user_by_email(session, email)
        if user is None:
            return None
        if not verify_password(password, user.password):
            logger.info("Failed login for user %d", user.id)
            return None
        session.expunge(user)
        return user


def require_user(session: Session, user_id: int) -> User:
    """Like :func:`get_user` but raises :class:`UserNotFound`."""
    user = session.get(User, user_id)
    if user is None:
        raise UserNotFound(user_id)
    return user
