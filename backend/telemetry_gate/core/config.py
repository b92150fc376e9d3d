"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Redis / Celery ────────────────────────
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/1"

    # ── Object Storage ────────────────────────
    # "s3" talks to any S3-compatible endpoint (MinIO, ADLS gateway, AWS).
    # "local" treats STORAGE_LOCAL_ROOT as the bucket, for dev without MinIO.
    STORAGE_BACKEND: str = "s3"
    STORAGE_ENDPOINT: str = "http://localhost:9000"
    STORAGE_ACCESS_KEY: str = "minioadmin"
    STORAGE_SECRET_KEY: str = "minioadmin"
    STORAGE_REGION: str = "us-east-1"
    STORAGE_BUCKET_NAME: str = "input"
    STORAGE_LOCAL_ROOT: str = "./data"

    # ── Routing prefixes ──────────────────────
    LANDING_PREFIX: str = "landing/"
    STAGING_PREFIX: str = "staging/"
    REJECTED_PREFIX: str = "rejected/"

    # ── Schema ────────────────────────────────
    # Upstream producers historically emit "latitiude" / "temeprature".
    # Flip this on if staging stays empty after a deploy.
    LEGACY_FIELD_SPELLING: bool = False

    # ── Application ───────────────────────────
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}

    @property
    def log_level(self) -> str:
        """Effective log level: DEBUG in development unless overridden."""
        if self.APP_ENV == "development" and self.LOG_LEVEL == "INFO":
            return "DEBUG"
        return self.LOG_LEVEL.upper()


settings = Settings()
