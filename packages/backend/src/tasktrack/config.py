"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with TASKTRACK_ prefix
(or a local .env file). No persistence settings: the store lives in memory
for the lifetime of the process.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings

FALLBACK_JWT_SECRET = "fallback_secret"


class Settings(BaseSettings):
    """All app configuration. Set via TASKTRACK_* env vars."""

    # Auth
    jwt_secret: str = FALLBACK_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 12

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_prefix": "TASKTRACK_", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Refuse the fallback signing secret outside development."""
        if (
            self.environment != "development"
            and self.jwt_secret == FALLBACK_JWT_SECRET
        ):
            raise ValueError(
                "TASKTRACK_JWT_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return self


# Singleton, import this everywhere
settings = Settings()
