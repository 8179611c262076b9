import logging
import secrets

from pydantic_settings import BaseSettings

_logger = logging.getLogger(__name__)


def _generate_secret(name: str) -> str:
    """Generate a random secret and warn that it should be set explicitly."""
    value = secrets.token_urlsafe(48)
    _logger.warning(
        "%s not set, using auto-generated value. "
        "Set %s in your .env or environment for production.",
        name,
        name,
    )
    return value


class Settings(BaseSettings):
    # App
    APP_NAME: str = "ATF Optimizer"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Security: nonces handed to the LCP beacon are signed with this key
    SECRET_KEY: str = ""
    NONCE_LIFETIME_SECONDS: int = 60 * 60 * 24  # 1 day

    # Database (above-the-fold metadata table)
    DATABASE_URL: str = "sqlite:///./atf_optimizer.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5

    # Site
    HOME_URL: str = "http://localhost:8000"
    AJAX_URL: str = "http://localhost:8000/wp-admin/admin-ajax.php"

    # Beacon assets
    BEACON_ASSETS_PATH: str = "./assets/js/"
    BEACON_ASSETS_URL: str = "http://localhost:8000/assets/js/"
    SCRIPT_DEBUG: bool = False  # serve the unminified beacon

    # Optimization options
    ATF_OPTIMIZATION_ENABLED: bool = True
    CACHE_MOBILE: bool = False
    DO_CACHING_MOBILE_FILES: bool = False

    def model_post_init(self, __context) -> None:
        if not self.SECRET_KEY or self.SECRET_KEY == "change-this-in-production":
            object.__setattr__(self, "SECRET_KEY", _generate_secret("SECRET_KEY"))

    # Sentry
    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.2
    SENTRY_ENVIRONMENT: str = "development"

    # Logging
    LOG_FORMAT: str = "json"  # "json" for production, "text" for development
    LOG_LEVEL: str = "INFO"

    # Metrics
    METRICS_ENABLED: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
