# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog's business logic:
# - models/: Pydantic schemas for data validation
# - services/: App, category and rating operations against Supabase
# - policies.py: Row-level access rules checked before every read/write
#
# Routes in app/ stay thin and delegate here.
# =============================================================================
