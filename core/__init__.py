# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the marketplace business logic:
# - models/: Pydantic schemas (users, claims, products)
# - services/: Account/approval and product catalog services
#
# Services take the Supabase client as a constructor argument and raise
# the API exceptions from app/exceptions.py.
# =============================================================================
