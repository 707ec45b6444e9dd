# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - apps.py: App listing, detail, create, update, delete
# - ratings.py: Rating submission/removal and review listing
# - search.py: Free-text app search
# - categories.py: Category listing and creation
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import apps
from . import ratings
from . import search
from . import categories

__all__ = [
    "health",
    "apps",
    "ratings",
    "search",
    "categories",
]
