"""
digital_bhutan.services.errors — Domain exceptions
===================================================

Services raise these; :mod:`digital_bhutan.api.errors` turns them into the
``{"message": ...}`` envelope using ``status_code``.
"""

from __future__ import annotations


class PlatformError(Exception):
    """Base class for every expected, user-facing failure."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(PlatformError, LookupError):
    status_code = 404


class InvalidRequest(PlatformError, ValueError):
    status_code = 400


class ConflictError(PlatformError):
    status_code = 409


class ExternalServiceError(PlatformError):
    status_code = 502


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------
class UserNotFound(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__("User not found")
        self.user_id = user_id


class ActivityNotFound(NotFoundError):
    def __init__(self, activity_id: int) -> None:
        super().__init__("Activity not found")
        self.activity_id = activity_id


class ApplicationNotFound(NotFoundError):
    def __init__(self, application_id: int) -> None:
        super().__init__("Application not found")
        self.application_id = application_id


class BusinessNotFound(NotFoundError):
    def __init__(self, business_id: int) -> None:
        super().__init__("Business not found")
        self.business_id = business_id


class JobNotFound(NotFoundError):
    def __init__(self, job_id: int) -> None:
        super().__init__("Job not found")
        self.job_id = job_id


class ProductNotFound(NotFoundError):
    def __init__(self, product_id: int) -> None:
        super().__init__("Product not found")
        self.product_id = product_id


# ---------------------------------------------------------------------------
# Bad input / state
# ---------------------------------------------------------------------------
class EmailAlreadyRegistered(InvalidRequest):
    def __init__(self, email: str) -> None:
        super().__init__("User already exists")
        self.email = email


class InvalidStatus(InvalidRequest):
    def __init__(self, status: str, allowed: tuple[str, ...]) -> None:
        super().__init__(f"Invalid status {status!r}; expected one of {', '.join(allowed)}")
        self.status = status


class InvalidPoints(InvalidRequest):
    def __init__(self, points: int) -> None:
        super().__init__("Points must be a non-negative integer")
        self.points = points


class OutOfStock(ConflictError):
    def __init__(self, product_id: int) -> None:
        super().__init__("Product is out of stock")
        self.product_id = product_id


class MintError(ExternalServiceError):
    pass


class AlreadyMinted(ConflictError):
    def __init__(self, user_id: int) -> None:
        super().__init__("Credential already minted")
        self.user_id = user_id
