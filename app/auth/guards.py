# =============================================================================
# app/auth/guards.py - Authorization Guards
# =============================================================================
# Guards are small objects that look at verified Claims and either return
# or raise ForbiddenError. They don't read the request or the database, so
# they can be tested on their own and composed with `&`:
#
#   guard = RequireRole(UserRole.FARMER) & RequireApprovedFarmer()
#   guard.check(claims)       # raises on the first failing guard
#   guard.allows(claims)      # True/False
# =============================================================================

import logging
from abc import ABC, abstractmethod

from app.exceptions import ForbiddenError
from core.models.user import Claims, UserRole, UserStatus

logger = logging.getLogger(__name__)


class Guard(ABC):
    """Base class for authorization checks over Claims."""

    @abstractmethod
    def check(self, claims: Claims) -> None:
        """Raise ForbiddenError if `claims` may not proceed."""

    def allows(self, claims: Claims) -> bool:
        try:
            self.check(claims)
        except ForbiddenError:
            return False
        return True

    def __and__(self, other: "Guard") -> "AllOf":
        return AllOf(self, other)


class AllOf(Guard):
    """Passes only if every guard passes; checked left to right."""

    def __init__(self, *guards: Guard):
        flattened: list[Guard] = []
        for guard in guards:
            if isinstance(guard, AllOf):
                flattened.extend(guard.guards)
            else:
                flattened.append(guard)
        self.guards = tuple(flattened)

    def check(self, claims: Claims) -> None:
        for guard in self.guards:
            guard.check(claims)

    def __repr__(self) -> str:
        return " & ".join(repr(guard) for guard in self.guards)


class RequireRole(Guard):
    """Passes if the caller's role is one of `roles`."""

    def __init__(self, *roles: UserRole):
        if not roles:
            raise ValueError("RequireRole needs at least one role")
        self.roles = frozenset(UserRole(role) for role in roles)

    def check(self, claims: Claims) -> None:
        if claims.role not in self.roles:
            logger.warning(f"User {claims.id} ({claims.role.value}) denied, needs one of {sorted(r.value for r in self.roles)}")
            raise ForbiddenError("Forbidden")

    def __repr__(self) -> str:
        return f"RequireRole({', '.join(sorted(r.value for r in self.roles))})"


class RequireApprovedFarmer(Guard):
    """
    Passes only for farmers an admin has approved.

    The two failures carry different messages and codes because the client
    does different things with them: a non-farmer can't fix it, a pending
    farmer just has to wait (and log in again once approved).
    """

    def check(self, claims: Claims) -> None:
        if claims.role is not UserRole.FARMER:
            logger.warning(f"User {claims.id} ({claims.role.value}) denied, farmer only")
            raise ForbiddenError("Farmer only", code="FARMER_ONLY")

        if claims.status is UserStatus.APPROVED:
            return
        if claims.status is UserStatus.PENDING:
            logger.warning(f"Farmer {claims.id} denied, not approved yet")
            raise ForbiddenError(
                "Farmer not approved by admin yet",
                code="FARMER_NOT_APPROVED",
                suggestion="Wait for an admin to approve your account, then log in again",
            )
        raise ForbiddenError(f"Unknown status: {claims.status!r}")

    def __repr__(self) -> str:
        return "RequireApprovedFarmer()"
