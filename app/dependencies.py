# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests swap the store out with:
#   app.dependency_overrides[get_supabase_client] = lambda: fake_client
# =============================================================================

from typing import Annotated

from fastapi import Depends
from supabase import Client

from core.services import ProductService, UserService
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> Client:
    """
    Get the shared Supabase client.

    Returns the handle created at startup by the app lifespan.
    """
    return SupabaseClient.get_client()


def get_user_service(client: Client = Depends(get_supabase_client)) -> UserService:
    """Build a UserService bound to the shared client."""
    return UserService(client)


def get_product_service(client: Client = Depends(get_supabase_client)) -> ProductService:
    """Build a ProductService bound to the shared client."""
    return ProductService(client)


# Type aliases for dependency injection
SupabaseDep = Annotated[Client, Depends(get_supabase_client)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
