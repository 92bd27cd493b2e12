# =============================================================================
# core/services/user_service.py - Accounts and Farmer Approval
# =============================================================================
# Handles registration, credential checks and the farmer approval flow.
#
# Farmer approval is a one-way state machine:
#   pending --(admin approves)--> approved
# There is no rejected state and approved never reverts. The transition is a
# single conditional UPDATE, so two admins approving at once cannot both
# "win" and an approved farmer is never touched again.
# =============================================================================

import logging
from typing import Any

from supabase import Client

from app.exceptions import (
    EmailAlreadyRegisteredError,
    FarmerNotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from core.models.user import SELF_REGISTER_ROLES, UserRole, UserStatus, initial_status
from lib.passwords import hash_password, verify_password
from lib.supabase_client import UNIQUE_VIOLATION, SupabaseClientError, run_query

logger = logging.getLogger(__name__)

USERS_TABLE = "users"

# Columns safe to send to clients (never password_hash)
PUBLIC_COLUMNS = "id, name, email, role, status, created_at"


def strip_password(row: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a user row without its password hash."""
    return {key: value for key, value in row.items() if key != "password_hash"}


class UserService:
    """
    Service for account and approval operations.

    Args:
        client: The shared Supabase client
    """

    def __init__(self, client: Client):
        self.client = client

    # -------------------------------------------------------------------------
    # Registration / Login
    # -------------------------------------------------------------------------

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole | str,
    ) -> dict[str, Any]:
        """
        Create a consumer or farmer account.

        Farmers start pending; consumers are approved immediately.

        Returns:
            The created user row, without password_hash

        Raises:
            ValidationFailedError: Missing fields or a role that can't self-register
            EmailAlreadyRegisteredError: The email already has an account
        """
        if not name or not email or not password or not role:
            raise ValidationFailedError("Missing fields")

        try:
            role = UserRole(role)
        except ValueError:
            raise ValidationFailedError("Invalid role", details={"role": str(role)})
        if role not in SELF_REGISTER_ROLES:
            raise ValidationFailedError("Invalid role", details={"role": role.value})

        return self._insert_user(name, email, password, role)

    def create_admin(self, name: str, email: str, password: str) -> dict[str, Any] | None:
        """
        Create an admin account unless the email is already taken.

        Admins can't self-register; this is used by scripts/seed_admin.py.

        Returns:
            The created row, or None if the email already existed
        """
        try:
            return self._insert_user(name, email, password, UserRole.ADMIN)
        except EmailAlreadyRegisteredError:
            logger.info(f"Admin not created, email already registered: {email}")
            return None

    def authenticate(self, email: str, password: str) -> dict[str, Any]:
        """
        Check an email/password pair.

        Unknown email and wrong password fail the same way so callers
        can't probe which emails are registered. Pending farmers may log in;
        posting is what requires approval.

        Returns:
            The user row, without password_hash

        Raises:
            UnauthorizedError: Invalid credentials
        """
        response = run_query(
            self.client.table(USERS_TABLE)
            .select("*")
            .eq("email", email)
            .limit(1),
            "FETCH_USER_FAILED",
        )
        rows = response.data or []
        if not rows or not verify_password(password, rows[0].get("password_hash")):
            logger.warning("Failed login attempt")
            raise UnauthorizedError("Invalid credentials")

        return strip_password(rows[0])

    # -------------------------------------------------------------------------
    # Farmer Approval
    # -------------------------------------------------------------------------

    def list_pending_farmers(self) -> list[dict[str, Any]]:
        """
        List farmers waiting for approval, oldest registration first.

        Returns:
            List of user dicts (id, name, email, role, status, created_at)
        """
        response = run_query(
            self.client.table(USERS_TABLE)
            .select(PUBLIC_COLUMNS)
            .eq("role", UserRole.FARMER.value)
            .eq("status", UserStatus.PENDING.value)
            .order("created_at"),
            "LIST_PENDING_FAILED",
        )
        return response.data or []

    def approve_farmer(self, farmer_id: int) -> dict[str, Any]:
        """
        Move a farmer from pending to approved.

        Zero rows updated means the id is unknown, isn't a farmer, or is
        already approved; all three are reported as the same not-found error.

        Returns:
            The updated user row, without password_hash

        Raises:
            FarmerNotFoundError: Nothing was approved
        """
        response = run_query(
            self.client.table(USERS_TABLE)
            .update({"status": UserStatus.APPROVED.value})
            .eq("id", farmer_id)
            .eq("role", UserRole.FARMER.value)
            .neq("status", UserStatus.APPROVED.value),
            "APPROVE_FARMER_FAILED",
            farmer_id=farmer_id,
        )
        rows = response.data or []
        if not rows:
            raise FarmerNotFoundError(farmer_id)

        logger.info(f"Approved farmer: {farmer_id}")
        return strip_password(rows[0])

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _insert_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole,
    ) -> dict[str, Any]:
        existing = run_query(
            self.client.table(USERS_TABLE).select("id").eq("email", email).limit(1),
            "FETCH_USER_FAILED",
        )
        if existing.data:
            raise EmailAlreadyRegisteredError(email)

        data = {
            "name": name,
            "email": email,
            "password_hash": hash_password(password),
            "role": role.value,
            "status": initial_status(role).value,
        }

        try:
            response = run_query(
                self.client.table(USERS_TABLE).insert(data),
                "INSERT_USER_FAILED",
            )
        except SupabaseClientError as e:
            # Lost a race with a concurrent registration for the same email
            if e.details.get("pg_code") == UNIQUE_VIOLATION:
                raise EmailAlreadyRegisteredError(email) from e
            raise

        if not response.data:
            raise SupabaseClientError("Insert returned no data", code="INSERT_USER_FAILED")

        user = strip_password(response.data[0])
        logger.info(f"Registered {role.value} user: {user['id']} ({user['status']})")
        return user
