"""
Recipe source connectors.

A connector is the only place that talks to the recipe backend. The
RecordStore depends on the BaseRecipeSource interface, so tests and
alternative backends can provide their own source.
"""

from catalog.connectors.base import BaseRecipeSource
from catalog.connectors.recipe_api import RecipeApiConnector

__all__ = ["BaseRecipeSource", "RecipeApiConnector"]
