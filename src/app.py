"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from storefront/domain.toml:
#   - "test"        -> in-memory providers
#   - "development" -> SQLite
#   - "production"  -> PostgreSQL at DATABASE_URL
from storefront.domain import storefront
from storefront.web import build_app

storefront.init()

app = build_app()
