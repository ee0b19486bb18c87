"""
Recipe image URL resolution.

Recipes store only an image file name (image_ref). The URL is the configured
image base joined with that name; recipes without an image get a fixed
placeholder. The same placeholder is used by the UI when a resolved URL fails
to load.
"""

from typing import Optional

from catalog.config import CatalogConfig

PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x400?text=No+Image"


def get_image_url(image_ref: str, base_url: Optional[str] = None) -> str:
    """
    Resolve an image reference to a URL.

    Args:
        image_ref: Image file name from the recipe
        base_url: Image base URL (optional, reads IMAGE_BASE_URL)

    Returns:
        "{base_url}/{image_ref}", or PLACEHOLDER_IMAGE when image_ref is empty.

    Examples:
        >>> get_image_url("pie.jpg", "https://img.example.com")
        'https://img.example.com/pie.jpg'
        >>> get_image_url("", "https://img.example.com") == PLACEHOLDER_IMAGE
        True
    """
    if not image_ref or not image_ref.strip():
        return PLACEHOLDER_IMAGE
    base = (base_url or CatalogConfig.get_image_base_url()).rstrip("/")
    return f"{base}/{image_ref}"
