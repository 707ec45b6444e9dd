# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the App Catalog API:
# - test_utils.py: Slug generation and UUID helpers
# - test_models.py: Pydantic model validation
# - test_policies.py: Row-level access rules
# - test_rating_aggregation.py: Folding ratings into averages
# - test_apps_api.py / test_ratings_api.py / test_categories_api.py:
#   Endpoint tests against an in-memory Supabase (tests/fakes.py)
# - test_auth.py / test_config.py: Token verification and settings
#
# Run tests with: pytest
# =============================================================================
