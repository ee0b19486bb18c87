"""
Favorites client.

Favorites live on the backend and are keyed by recipe record_id. All calls
need a bearer token:
- GET    /favorites                  -> {"success": true, "data": [recipe, ...]}
- GET    /favorites/check/{id}       -> {"success": true, "data": {"isFavorited": bool}}
- POST   /favorites/{id}
- DELETE /favorites/{id}

Favorite status is tracked separately from the RecordStore; none of these
calls touch or invalidate the recipe cache.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from catalog.config import CatalogConfig
from catalog.exceptions import FavoritesAuthError, FavoritesError
from catalog.models import Recipe

logger = logging.getLogger(__name__)


class FavoritesClient:
    """Bearer-authenticated access to the favorites endpoints."""

    def __init__(
        self,
        token: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            token: Bearer token; None means the user is not logged in
            base_url: Backend URL including the /api prefix (optional, reads RECIPE_API_URL)
            timeout: Request timeout in seconds (optional, reads REQUEST_TIMEOUT_SECONDS)
            session: Optional requests.Session to reuse connections
        """
        self.token = token
        self.base_url = (base_url or CatalogConfig.get_api_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else CatalogConfig.get_request_timeout()
        self.session = session or requests.Session()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            raise FavoritesAuthError("Please log in to use favorites")
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str) -> Dict[str, Any]:
        headers = self._headers()
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FavoritesError(f"Favorites request failed: {e}") from e

        if response.status_code in (401, 403):
            raise FavoritesAuthError("Your session has expired, please log in again",
                                     status_code=response.status_code)
        if response.status_code >= 400:
            message = _error_message(response) or f"Failed to update favorite ({response.status_code})"
            raise FavoritesError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def is_favorited(self, record_id: str) -> bool:
        """Check whether the recipe is in the user's favorites."""
        body = self._request("GET", f"/favorites/check/{record_id}")
        data = body.get("data") if body.get("success") else None
        if not isinstance(data, dict):
            return False
        return bool(data.get("isFavorited", False))

    def add(self, record_id: str) -> None:
        self._request("POST", f"/favorites/{record_id}")
        logger.info(f"Added recipe {record_id} to favorites")

    def remove(self, record_id: str) -> None:
        self._request("DELETE", f"/favorites/{record_id}")
        logger.info(f"Removed recipe {record_id} from favorites")

    def toggle(self, record_id: str, currently_favorited: bool) -> bool:
        """
        Flip the favorite status of a recipe.

        Args:
            record_id: Recipe identity
            currently_favorited: Status currently shown to the user

        Returns:
            The new favorite status.
        """
        if currently_favorited:
            self.remove(record_id)
            return False
        self.add(record_id)
        return True

    def list_favorites(self) -> List[Recipe]:
        """
        Get the user's favorite recipes.

        Documents without a usable `_id` are skipped.
        """
        body = self._request("GET", "/favorites")
        data = body.get("data") if body.get("success") else None
        if not isinstance(data, list):
            return []

        recipes: List[Recipe] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                recipes.append(Recipe.from_api(item))
            except ValidationError:
                logger.debug("Skipping favorite without a usable _id")
        return recipes


def _error_message(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
