"""
digital_bhutan.api.schemas — Request bodies
============================================

Bodies are camelCase on the wire; snake_case field names are accepted too.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class RegisterRequest(CamelModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    password: str = Field(min_length=8)
    profile_image_url: str | None = None


class LoginRequest(CamelModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str


# ---------------------------------------------------------------------------
# Citizen services
# ---------------------------------------------------------------------------
class ResidencyApply(CamelModel):
    user_id: int | None = None
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    country_of_origin: str = Field(min_length=1)
    reason_for_residency: str = Field(min_length=1)


class StatusUpdate(CamelModel):
    status: str
    reviewer_id: int | None = None


class BusinessCreate(CamelModel):
    owner_id: int | None = None
    name: str = Field(min_length=1)
    description: str
    category: str = Field(min_length=1)
    license_number: str | None = None


class JobCreate(CamelModel):
    posted_by: int | None = None
    business_id: int | None = None
    title: str = Field(min_length=1)
    description: str
    category: str = Field(min_length=1)
    experience_level: str = Field(min_length=1)
    location: str
    employment_type: str
    skills: list[str] = Field(default_factory=list)


class JobApply(CamelModel):
    applicant_id: int | None = None
    cover_letter: str | None = None
    resume_url: str | None = None


class ProductCreate(CamelModel):
    seller_id: int | None = None
    name: str = Field(min_length=1)
    description: str
    price: Decimal = Field(max_digits=10, decimal_places=2)
    category: str = Field(min_length=1)
    brownie_points_reward: int = 0
    image_url: str | None = None
    in_stock: bool = True


class PurchaseRequest(CamelModel):
    user_id: int | None = None


class ActivityComplete(CamelModel):
    user_id: int | None = None
    score: int | None = None


# ---------------------------------------------------------------------------
# Admin console
# ---------------------------------------------------------------------------
class ManualAward(CamelModel):
    user_id: int
    points: int
    reason: str = ""


class MintRequest(CamelModel):
    to_address: str = Field(min_length=1)


class SettingUpdate(CamelModel):
    key: str
    value: Any
    category: str | None = None
    description: str | None = None


class LogLevelUpdate(CamelModel):
    level: str
