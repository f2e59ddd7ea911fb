"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with CONTACTBOOK_ prefix,
optionally read from a local .env file (handy for the Mongo URI in dev).

Learn: pydantic-settings auto-loads from environment, validates types,
provides defaults. The JWT secret is config, never a constant in code.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """All app configuration. Set via CONTACTBOOK_* env vars."""

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "contactbook"
    collection: str = "contacts"
    mongo_timeout_ms: int = 5000  # server selection / connect timeout

    # Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = {"env_prefix": "CONTACTBOOK_", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure the signing secret is changed in non-development environments."""
        if (
            self.environment != "development"
            and self.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ValueError(
                "CONTACTBOOK_JWT_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return self


# Singleton — import this everywhere
settings = Settings()
