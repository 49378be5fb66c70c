"""Caller identity handed to every use case by the authentication layer.

Credentials are verified upstream; the core only trusts the id and role.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import (
    ForbiddenError,
    UnauthenticatedError,
    ValidationError,
)


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Caller:

    user_id: str
    role: Role = Role.USER

    def __post_init__(self) -> None:
        if not self.user_id or not str(self.user_id).strip():
            raise UnauthenticatedError("Not authorized to access this route")

    @staticmethod
    def of(user_id: str | None, role: str = "user") -> Caller:
        try:
            parsed = Role(role.strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown role {role!r}") from None
        return Caller(user_id=(user_id or "").strip(), role=parsed)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_admin(self) -> None:
        if not self.is_admin:
            raise ForbiddenError(
                f"User role {self.role.value} is not authorized to access this route"
            )
