"""Runtime settings read from the environment.

Values are read on every call so tests can adjust the environment with
``monkeypatch.setenv`` without reloading modules.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    environment: str
    jwt_secret: str
    jwt_algorithm: str
    jwt_expires_days: int
    stripe_secret_key: str | None
    stripe_webhook_secret: str | None
    app_url: str
    upload_dir: str
    currency: str
    checkout_tax_rate: float
    low_stock_threshold: int
    bcrypt_rounds: int

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def get_settings() -> Settings:
    return Settings(
        environment=os.environ.get("PROTEAN_ENV", "development").lower(),
        jwt_secret=os.environ.get("JWT_SECRET", "storefront-development-secret"),
        jwt_algorithm="HS256",
        jwt_expires_days=int(os.environ.get("JWT_EXPIRES_DAYS", "7")),
        stripe_secret_key=os.environ.get("STRIPE_SECRET_KEY") or None,
        stripe_webhook_secret=os.environ.get("STRIPE_WEBHOOK_SECRET") or None,
        app_url=os.environ.get("APP_URL", "http://localhost:3000").rstrip("/"),
        upload_dir=os.environ.get("UPLOAD_DIR", "uploads"),
        currency=os.environ.get("CHECKOUT_CURRENCY", "eur"),
        checkout_tax_rate=float(os.environ.get("CHECKOUT_TAX_RATE", "0.23")),
        low_stock_threshold=int(os.environ.get("LOW_STOCK_THRESHOLD", "10")),
        bcrypt_rounds=int(os.environ.get("BCRYPT_ROUNDS", "12")),
    )
