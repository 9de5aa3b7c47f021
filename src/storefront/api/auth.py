"""Caller identity for API requests.

The session provider in front of the API authenticates the user and forwards
the result as ``X-User-Id`` and ``X-User-Role`` headers; routes only read them.
"""

from dataclasses import dataclass

from fastapi import Depends, Header

from storefront.errors import Forbidden, Unauthorized

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def current_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    if not x_user_id:
        raise Unauthorized("Unauthorized")
    return Caller(user_id=x_user_id, role=(x_user_role or "user").lower())


def require_admin(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_admin:
        raise Forbidden("Admin access required")
    return caller
