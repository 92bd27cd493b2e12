# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Registration, login, and a "who am I" endpoint.
#
# Tokens carry the role/status at the moment they are issued. A farmer
# approved after logging in has to log in again to be allowed to post.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_claims
from app.auth.tokens import issue_token
from app.dependencies import UserServiceDep
from core.models.user import AuthResponse, Claims, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, users: UserServiceDep):
    """
    Create a consumer or farmer account.

    Farmers start out pending and can't list products until an admin
    approves them.

    Raises:
        400: Missing fields or invalid role
        409: Email already registered
    """
    user = users.register(
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role,
    )
    return {"user": user, "token": issue_token(user)}


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, users: UserServiceDep):
    """
    Exchange email and password for a token.

    Raises:
        401: Invalid credentials
    """
    user = users.authenticate(request.email, request.password)
    logger.info(f"User {user['id']} logged in ({user['role']}, {user['status']})")
    return {"user": user, "token": issue_token(user)}


@router.get("/me", response_model=Claims)
def me(claims: Claims = Depends(get_current_claims)):
    """
    Return the identity carried by the current token.

    Useful for checking if a stored token is still valid, and what
    status it was issued with.

    Raises:
        401: If token is missing, invalid or expired
    """
    return claims
