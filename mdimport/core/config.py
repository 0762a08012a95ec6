"""
Configuration module - centralized settings for the importer.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Importer settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To provide credentials, set environment variables:
        export GOOGLE_ACCESS_TOKEN=ya29.xxx
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "Markdown Docs Importer"

    # DEBUG: Log the full edit script and every located placeholder
    DEBUG: bool = False

    # LOG_LEVEL: Root level used by the script entry point
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # GOOGLE API SETTINGS
    # ---------------------------------------------------------------------------
    # GOOGLE_ACCESS_TOKEN: OAuth access token with documents + drive.file scopes
    # - Obtaining and refreshing the token is handled outside this package
    GOOGLE_ACCESS_TOKEN: str = ""

    DOCS_API_BASE_URL: str = "https://docs.googleapis.com/v1"
    DRIVE_API_BASE_URL: str = "https://www.googleapis.com/drive/v3"
    DRIVE_UPLOAD_BASE_URL: str = "https://www.googleapis.com/upload/drive/v3"

    # API request timeout in seconds
    API_REQUEST_TIMEOUT: float = 30.0

    # ---------------------------------------------------------------------------
    # IMAGE IMPORT SETTINGS
    # ---------------------------------------------------------------------------
    # IMAGE_CLEANUP_TIMEOUT: Budget for deleting one uploaded image after a
    # failed publish (seconds). Runs even if the caller was cancelled.
    IMAGE_CLEANUP_TIMEOUT: float = 5.0

    # BATCH_CLEANUP_TIMEOUT: Budget for deleting all staged uploads once the
    # import finished (seconds)
    BATCH_CLEANUP_TIMEOUT: float = 15.0

    # STRICT_IMAGE_PLACEHOLDERS: Fail the import when an image placeholder
    # cannot be located or its URL was not resolved.
    # False keeps best-effort behavior: that image is left out of the edit.
    STRICT_IMAGE_PLACEHOLDERS: bool = False

    # ABORT_ON_IMAGE_ERROR: Abort the whole import when one image fails to
    # resolve or upload. False skips that image and keeps going.
    ABORT_ON_IMAGE_ERROR: bool = True


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from mdimport.core.config import settings
settings = Settings()
