"""
Configuration management for the Recipe Catalog Browser.

This module centralizes environment variable loading from the .env file at the
project root. It is imported early by the Streamlit entry point so that .env is
loaded before any other code reads environment variables.

In deployments without a .env file, load_dotenv() is a no-op and the platform
environment is used instead.

Environment Variables:
- RECIPE_API_URL: Optional, base URL of the recipe backend (including the /api prefix)
- IMAGE_BASE_URL: Optional, base URL for recipe images (defaults to {RECIPE_API_URL}/gridfs-images)
- RECIPE_FETCH_LIMIT: Optional, page size requested for the full collection fetch (default: 50000)
- RECIPE_PAGE_SIZE: Optional, number of recipes shown per page (default: 48)
- REQUEST_TIMEOUT_SECONDS: Optional, HTTP timeout for backend calls (default: 30)
- LOG_LEVEL: Optional, logging level name (default: INFO)
- RECIPE_API_TOKEN: Optional, bearer token used for favorites calls
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_RECIPE_API_URL = "https://recipebackend-production-5f88.up.railway.app/api"
DEFAULT_FETCH_LIMIT = 50000
DEFAULT_PAGE_SIZE = 48
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"


def load_env_file() -> None:
    """
    Load environment variables from the .env file at the project root.

    The project root is found by going up from this file's location
    (catalog/config.py -> catalog/ -> project root). Existing environment
    variables take precedence over values in .env.

    Safe to call multiple times.
    """
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


def _get_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using default {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using default {default}")
        return default
    return value


class CatalogConfig:
    """Configuration for the recipe backend and the browsing pages."""

    @staticmethod
    def get_api_url() -> str:
        """
        Get the recipe backend base URL.

        Returns:
            URL string with trailing slash removed
            (default: the hosted recipe backend)
        """
        return os.getenv("RECIPE_API_URL", DEFAULT_RECIPE_API_URL).rstrip("/")

    @staticmethod
    def get_image_base_url() -> str:
        """
        Get the base URL that image references are appended to.

        Returns:
            URL string with trailing slash removed. Defaults to the backend's
            GridFS image route.
        """
        url = os.getenv("IMAGE_BASE_URL")
        if url:
            return url.rstrip("/")
        return f"{CatalogConfig.get_api_url()}/gridfs-images"

    @staticmethod
    def get_fetch_limit() -> int:
        """
        Get the page size requested when fetching the full collection.

        The backend returns a small page by default, so a large limit is sent
        to retrieve everything in one call.
        """
        return _get_positive_int("RECIPE_FETCH_LIMIT", DEFAULT_FETCH_LIMIT)

    @staticmethod
    def get_page_size() -> int:
        """Get the number of recipes shown per page (default: 48)."""
        return _get_positive_int("RECIPE_PAGE_SIZE", DEFAULT_PAGE_SIZE)

    @staticmethod
    def get_request_timeout() -> float:
        """
        Get the HTTP timeout for backend calls in seconds.

        Returns:
            Timeout as float (default: 30.0). Invalid values fall back to the default.
        """
        raw = os.getenv("REQUEST_TIMEOUT_SECONDS")
        if not raw:
            return DEFAULT_REQUEST_TIMEOUT_SECONDS
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"Ignoring invalid REQUEST_TIMEOUT_SECONDS={raw!r}")
            return DEFAULT_REQUEST_TIMEOUT_SECONDS
        return value if value > 0 else DEFAULT_REQUEST_TIMEOUT_SECONDS

    @staticmethod
    def get_log_level() -> int:
        """
        Get the logging level.

        Returns:
            Numeric logging level (default: logging.INFO)
        """
        name = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    @staticmethod
    def get_api_token() -> Optional[str]:
        """
        Get the bearer token for favorites calls.

        Returns:
            Token string or None if not set
        """
        return os.getenv("RECIPE_API_TOKEN") or None


def get_config_summary() -> dict:
    """
    Get a dictionary describing the effective configuration.

    Used by the System Status page. The API token is reported only as present
    or absent.
    """
    return {
        "api_url": CatalogConfig.get_api_url(),
        "image_base_url": CatalogConfig.get_image_base_url(),
        "fetch_limit": CatalogConfig.get_fetch_limit(),
        "page_size": CatalogConfig.get_page_size(),
        "request_timeout": CatalogConfig.get_request_timeout(),
        "api_token_set": CatalogConfig.get_api_token() is not None,
    }
