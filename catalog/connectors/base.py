"""
Base recipe source abstract class.

All recipe sources must:
- Provide fetch_recipes, returning the whole collection as Recipe objects
- Provide fetch_recipe, returning one Recipe by its record_id
- Raise RecordFetchError for any failure, never return partial results
"""

from abc import ABC, abstractmethod
from typing import List

from catalog.models import Recipe


class BaseRecipeSource(ABC):
    """
    Abstract base class for recipe sources.

    Attributes:
        name: Short identifier used in log messages
    """
    name: str

    @abstractmethod
    def fetch_recipes(self, limit: int) -> List[Recipe]:
        """
        Fetch the full recipe collection in one call.

        Args:
            limit: Page size to request; large enough to cover the whole collection

        Returns:
            List of Recipe objects in backend order.

        Raises:
            RecordFetchError: If the request fails or the response is malformed.
        """
        pass

    @abstractmethod
    def fetch_recipe(self, record_id: str) -> Recipe:
        """
        Fetch a single recipe by its record_id.

        Raises:
            RecordFetchError: If the request fails, the recipe does not exist,
                or the response is malformed.
        """
        pass
