"""
Text search and ingredient tag filtering over a recipe snapshot.

These are pure functions: they read the collection they are given, never
mutate it, and return a new list (or the input itself when there is nothing
to filter).

- search_recipes: single free-text query, by title or by ingredient
- filter_by_tags: faceted narrowing, a recipe must match every selected tag

Ingredient matching looks at both the full ingredient list and the curated
extracted ingredients; a match in either is enough. Malformed entries are
ignored via catalog.fields, and a record that still fails to evaluate is
treated as a non-match so one bad document cannot break the page.
"""

import logging
from enum import Enum
from typing import Callable, Iterable, List, Sequence, TypeVar, Union

from catalog.fields import any_contains
from catalog.models import Recipe

logger = logging.getLogger(__name__)

RecipeSeq = TypeVar("RecipeSeq", bound=Sequence[Recipe])


class SearchMode(str, Enum):
    TITLE = "title"
    INGREDIENT = "ingredient"


def matches_title(recipe: Recipe, needle_lower: str) -> bool:
    return needle_lower in recipe.title.lower()


def matches_ingredient(recipe: Recipe, needle_lower: str) -> bool:
    """
    Check whether any ingredient or extracted ingredient contains the needle.

    Args:
        recipe: Recipe to check
        needle_lower: Lower-cased substring
    """
    return (
        any_contains(recipe.clean_ingredients(), needle_lower)
        or any_contains(recipe.clean_extracted_ingredients(), needle_lower)
    )


def _safe_match(predicate: Callable[[Recipe], bool], recipe: Recipe) -> bool:
    try:
        return predicate(recipe)
    except Exception as e:
        logger.debug(f"Skipping recipe {getattr(recipe, 'record_id', '?')} during search: {e}")
        return False


def search_recipes(
    recipes: RecipeSeq,
    query: str,
    mode: Union[SearchMode, str] = SearchMode.TITLE,
) -> Union[RecipeSeq, List[Recipe]]:
    """
    Search recipes by title or by ingredient.

    Args:
        recipes: Collection snapshot
        query: Free-text query; matched case-insensitively as a substring
        mode: SearchMode.TITLE or SearchMode.INGREDIENT (string values accepted)

    Returns:
        The input collection itself when `query` is empty, otherwise a new
        list of matching recipes in input order.

    Examples:
        >>> recipes = [Recipe(_id="a", title="Apple Pie"), Recipe(_id="b", title="Banana Bread")]
        >>> [r.title for r in search_recipes(recipes, "APPLE")]
        ['Apple Pie']
    """
    if not query:
        return recipes

    needle = query.lower()
    if SearchMode(mode) is SearchMode.TITLE:
        predicate = lambda recipe: matches_title(recipe, needle)  # noqa: E731
    else:
        predicate = lambda recipe: matches_ingredient(recipe, needle)  # noqa: E731

    return [recipe for recipe in recipes if _safe_match(predicate, recipe)]


def filter_by_tags(recipes: RecipeSeq, tags: Iterable[str]) -> Union[RecipeSeq, List[Recipe]]:
    """
    Keep recipes that contain every selected ingredient tag.

    Each tag is matched like an ingredient-mode search (substring of any
    ingredient or extracted ingredient, case-insensitive). Tags are combined
    with AND, so adding a tag can only shrink the result.

    Args:
        recipes: Collection snapshot
        tags: Selected ingredient tags

    Returns:
        The input collection itself when no tags are selected, otherwise a
        new list of recipes matching all tags.
    """
    needles = [tag.lower() for tag in tags if tag]
    if not needles:
        return recipes

    def matches_all(recipe: Recipe) -> bool:
        return all(matches_ingredient(recipe, needle) for needle in needles)

    return [recipe for recipe in recipes if _safe_match(matches_all, recipe)]
