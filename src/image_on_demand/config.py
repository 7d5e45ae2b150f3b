import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

from image_on_demand.exceptions import ConfigurationError

load_dotenv()

DEFAULT_IMAGE_FILE_EXT = "gif,jpg,jpeg,png,webp,bmp,tif,tiff"


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip().lower() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    The step sizes correspond to the ``image_on_demand_service`` extension
    options ``imageStepWidth`` and ``imageStepHeight``.
    """

    # Dimension rounding
    image_step_width: int = int(os.getenv("IMAGE_STEP_WIDTH", "10"))
    image_step_height: int = int(os.getenv("IMAGE_STEP_HEIGHT", "10"))
    default_width: int = 400
    default_height: int = 400
    max_image_dimension: int = int(os.getenv("MAX_IMAGE_DIMENSION", "4000"))

    # Routes
    base_path: str = os.getenv("IMAGE_BASE_PATH", "/image-service/")
    dummy_base_path: str = os.getenv("DUMMY_IMAGE_BASE_PATH", "/dummyimage/")
    public_url_prefix: str = os.getenv("PUBLIC_URL_PREFIX", "/image-service-files/")

    # Rendering
    allowed_extensions: tuple[str, ...] = _split_list(os.getenv("IMAGE_FILE_EXT", DEFAULT_IMAGE_FILE_EXT))
    images_dir: str = os.getenv("IMAGES_DIR", "./var/images")
    font_path: str = os.getenv("FONT_PATH", "")
    max_text_length: int = int(os.getenv("MAX_TEXT_LENGTH", "100"))

    # Assets
    asset_manifest: str = os.getenv("ASSET_MANIFEST", "")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "86400"))  # 0 disables expiry
    cache_prefix: str = os.getenv("CACHE_PREFIX", "image_on_demand_service")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.image_step_width <= 0 or self.image_step_height <= 0:
            raise ConfigurationError(
                f"IMAGE_STEP_WIDTH and IMAGE_STEP_HEIGHT must be greater than 0, "
                f"got {self.image_step_width} and {self.image_step_height}"
            )

        if self.cache_backend not in ("redis", "memory"):
            raise ConfigurationError(
                f"CACHE_BACKEND must be one of ['redis', 'memory'], got {self.cache_backend!r}"
            )

        if self.max_text_length <= 0 or self.max_image_dimension <= 0:
            raise ConfigurationError("MAX_TEXT_LENGTH and MAX_IMAGE_DIMENSION must be positive")

        if self.cache_ttl < 0:
            raise ConfigurationError("CACHE_TTL must not be negative")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(settings: Settings | None = None) -> redis.Redis:
    """Create a Redis client instance."""
    settings = settings or get_settings()
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
