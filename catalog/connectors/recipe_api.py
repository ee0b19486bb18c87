"""
HTTP connector for the recipe backend.

This connector talks to the REST backend with `requests` and normalizes its
responses into Recipe objects:
- GET /recipes?limit=N returns {"data": [recipe, ...]}
- GET /recipes/{record_id} returns {"data": recipe}

Every failure (timeout, connection error, non-2xx status, body without the
{"data": ...} envelope) is raised as RecordFetchError so the RecordStore can
leave its state untouched and let the caller decide whether to retry.

Documents without a usable `_id` cannot be cached by identity and are skipped
with a warning; all other malformed fields are normalized by the Recipe model.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from catalog.config import CatalogConfig
from catalog.exceptions import RecordFetchError
from catalog.models import Recipe

from .base import BaseRecipeSource

logger = logging.getLogger(__name__)


class RecipeApiConnector(BaseRecipeSource):
    """
    Connector for the recipe REST backend.

    Base URL and timeout default to CatalogConfig values and can be overridden
    per instance.
    """
    name = "recipe_api"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the connector.

        Args:
            base_url: Backend URL including the /api prefix (optional, reads RECIPE_API_URL)
            timeout: Request timeout in seconds (optional, reads REQUEST_TIMEOUT_SECONDS)
            session: Optional requests.Session to reuse connections
        """
        self.base_url = (base_url or CatalogConfig.get_api_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else CatalogConfig.get_request_timeout()
        self.session = session or requests.Session()

    def _get_data(self, path: str, operation: str, record_id: Optional[str] = None,
                  params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.Timeout as e:
            raise RecordFetchError(
                f"Request to {url} timed out after {self.timeout}s",
                operation=operation, record_id=record_id,
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise RecordFetchError(
                f"Could not connect to recipe backend at {self.base_url}",
                operation=operation, record_id=record_id,
            ) from e
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise RecordFetchError(
                f"Recipe backend returned an error: {status_code}",
                operation=operation, record_id=record_id, status_code=status_code,
            ) from e
        except requests.exceptions.RequestException as e:
            raise RecordFetchError(
                f"Request to {url} failed: {e}",
                operation=operation, record_id=record_id,
            ) from e
        except ValueError as e:
            # response.json() failed
            raise RecordFetchError(
                f"Recipe backend returned a non-JSON body for {url}",
                operation=operation, record_id=record_id,
            ) from e

        if not isinstance(body, dict) or "data" not in body:
            raise RecordFetchError(
                f"Unexpected response shape from {url}: missing 'data'",
                operation=operation, record_id=record_id,
            )
        return body["data"]

    def fetch_recipes(self, limit: int) -> List[Recipe]:
        """
        Fetch the full collection via GET /recipes?limit=N.

        Returns:
            List of Recipe objects. Documents that are not objects or lack a
            usable `_id` are skipped.

        Raises:
            RecordFetchError: On any request failure or if `data` is not a list.
        """
        data = self._get_data("/recipes", operation="fetch_all", params={"limit": limit})
        if not isinstance(data, list):
            raise RecordFetchError(
                "Unexpected response shape from /recipes: 'data' is not a list",
                operation="fetch_all",
            )

        recipes: List[Recipe] = []
        skipped = 0
        for item in data:
            if not isinstance(item, dict):
                skipped += 1
                continue
            try:
                recipes.append(Recipe.from_api(item))
            except ValidationError:
                skipped += 1

        if skipped:
            logger.warning(f"Skipped {skipped} recipe documents without a usable _id")
        return recipes

    def fetch_recipe(self, record_id: str) -> Recipe:
        """
        Fetch one recipe via GET /recipes/{record_id}.

        Raises:
            RecordFetchError: On any request failure or if the document is unusable.
        """
        data = self._get_data(f"/recipes/{record_id}", operation="fetch_by_id", record_id=record_id)
        if not isinstance(data, dict):
            raise RecordFetchError(
                f"Unexpected response shape for recipe {record_id}",
                operation="fetch_by_id", record_id=record_id,
            )
        try:
            return Recipe.from_api(data)
        except ValidationError as e:
            raise RecordFetchError(
                f"Recipe {record_id} is missing a usable _id",
                operation="fetch_by_id", record_id=record_id,
            ) from e
