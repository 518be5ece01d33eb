"""Configuration management for the OGP preview service."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, TypeVar

from dotenv import load_dotenv
from pydantic import (
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent

# Pillow format name for each supported file extension
IMAGE_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "webp": "WEBP",
}


T = TypeVar("T")


def _warn_invalid(field_name: str, raw_value: object, default: T, reason: str) -> T:
    """Log a user-friendly message and return the safe default."""
    logger.warning(
        "Invalid value for %s=%r; %s. Falling back to %r.",
        field_name,
        raw_value,
        reason,
        default,
    )
    return default


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False
    )

    # Application settings
    APP_HOST: str = Field("0.0.0.0", description="Host address the app binds to")
    PORT: int = Field(3000, gt=0, lt=65536, description="Port the app listens on")
    DEBUG: bool = Field(False, description="Enable debug logging")
    SITE_ORIGIN: Optional[str] = Field(
        default=None,
        description="Origin used for absolute URLs in OGP tags (defaults to http://localhost:PORT)",
    )

    # Sentry/GlitchTip settings
    SENTRY_DSN: Optional[str] = Field(default=None, description="Sentry DSN")
    SENTRY_ENVIRONMENT: str = Field("production", description="Sentry environment name")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(0.1, ge=0.0, le=1.0, description="Tracing sample rate")

    # Static files and image slots
    PUBLIC_DIR: str = Field(
        str(PROJECT_ROOT / "public"), description="Directory served as static files at /"
    )
    OGP_IMAGE_SUBDIR: str = Field(
        "images/ogp", description="Image slot directory, relative to PUBLIC_DIR"
    )
    OGP_TOTAL_IMAGES: int = Field(1000, gt=0, description="Number of numbered image slots")
    OGP_IMAGE_FORMAT: str = Field("png", description="Image file extension (png, jpg, webp)")
    OGP_GENERATE_ON_STARTUP: bool = Field(
        True, description="Fill in missing image slots when the server starts"
    )

    # Preview text
    RANDOM_TEXT_LENGTH: int = Field(10, ge=0, description="Length of the decorative random text")

    # Canvas size of generated images (Open Graph standard)
    IMAGE_WIDTH: int = Field(1200, frozen=True)
    IMAGE_HEIGHT: int = Field(630, frozen=True)

    @field_validator("PORT", mode="before")
    @classmethod
    def validate_port(cls, value: object, info: ValidationInfo) -> int:
        if info.field_name is None:
            return 3000
        default: int = cls.model_fields[info.field_name].default
        try:
            port = int(value)  # type: ignore[arg-type]
            if 0 < port < 65536:
                return port
        except (TypeError, ValueError):
            pass
        return _warn_invalid(info.field_name, value, default, "must be a positive integer < 65536")

    @field_validator("OGP_TOTAL_IMAGES", mode="before")
    @classmethod
    def validate_total_images(cls, value: object, info: ValidationInfo) -> int:
        if info.field_name is None:
            return 1000
        default: int = cls.model_fields[info.field_name].default
        try:
            total = int(value)  # type: ignore[arg-type]
            if total > 0:
                return total
        except (TypeError, ValueError):
            pass
        return _warn_invalid(info.field_name, value, default, "must be a positive integer")

    @field_validator("RANDOM_TEXT_LENGTH", mode="before")
    @classmethod
    def validate_text_length(cls, value: object, info: ValidationInfo) -> int:
        if info.field_name is None:
            return 10
        default: int = cls.model_fields[info.field_name].default
        try:
            length = int(value)  # type: ignore[arg-type]
            if length >= 0:
                return length
        except (TypeError, ValueError):
            pass
        return _warn_invalid(info.field_name, value, default, "must be a non-negative integer")

    @field_validator("SENTRY_TRACES_SAMPLE_RATE", mode="before")
    @classmethod
    def validate_sample_rate(cls, value: object, info: ValidationInfo) -> float:
        if info.field_name is None:
            return 0.1
        default: float = cls.model_fields[info.field_name].default
        try:
            rate = float(value)  # type: ignore[arg-type]
            if 0.0 <= rate <= 1.0:
                return rate
        except (TypeError, ValueError):
            pass
        return _warn_invalid(info.field_name, value, default, "must be between 0.0 and 1.0")

    @field_validator("OGP_IMAGE_FORMAT", mode="before")
    @classmethod
    def validate_image_format(cls, value: object, info: ValidationInfo) -> str:
        if info.field_name is None:
            return "png"
        default: str = cls.model_fields[info.field_name].default
        if isinstance(value, str) and value.lower().lstrip(".") in IMAGE_FORMATS:
            return value.lower().lstrip(".")
        return _warn_invalid(
            info.field_name, value, default, f"must be one of {', '.join(IMAGE_FORMATS)}"
        )

    @field_validator("SITE_ORIGIN", mode="before")
    @classmethod
    def validate_site_origin(cls, value: object, info: ValidationInfo) -> Optional[str]:
        if value is None or value == "":
            return None
        adapter = TypeAdapter(HttpUrl)
        try:
            adapter.validate_python(value)
        except ValidationError:
            return _warn_invalid(
                info.field_name or "SITE_ORIGIN", value, None, "must be a valid URL"
            )
        # HttpUrl normalization appends "/", keep the raw origin instead
        return str(value).rstrip("/")

    @model_validator(mode="after")
    def default_site_origin(self) -> "Config":
        if self.SITE_ORIGIN is None:
            self.SITE_ORIGIN = f"http://localhost:{self.PORT}"
        return self

    @property
    def site_origin(self) -> str:
        """Origin without a trailing slash."""
        return str(self.SITE_ORIGIN).rstrip("/")

    @property
    def ogp_image_dir(self) -> Path:
        """Directory holding the numbered image slots."""
        return Path(self.PUBLIC_DIR) / self.OGP_IMAGE_SUBDIR

    @property
    def ogp_image_url_path(self) -> str:
        """Site-relative URL path of the image slot directory."""
        return "/" + self.OGP_IMAGE_SUBDIR.strip("/")


@lru_cache()
def get_config() -> Config:
    """Load configuration once and reuse across the application."""
    return Config()  # type: ignore[call-arg]


def _reset_config_cache_for_tests() -> None:
    """Allow tests to rebuild configuration with fresh environment variables."""

    get_config.cache_clear()


config = get_config()
