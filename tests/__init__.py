# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Temo Connect API:
# - fakes.py: In-memory stand-in for the Supabase client
# - test_models.py: Pydantic model validation
# - test_tokens.py / test_guards.py: Token service and authorization guards
# - test_user_service.py / test_product_service.py: Service logic
# - test_api.py: HTTP endpoints and the farmer onboarding flow
#
# Run tests with: pytest
# =============================================================================
