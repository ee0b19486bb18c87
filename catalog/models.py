"""
Recipe model for the catalog.

This module defines the canonical Recipe schema used throughout the catalog.
The backend returns MongoDB-style documents; Recipe maps their wire names
(`_id`, `id`, `imageName`, `extractedIngredients`) onto snake_case attributes
and normalizes malformed fields instead of rejecting the record.

# NOTE: Only `_id` is required. Every other field falls back to a
    present-but-empty value, so a partially filled recipe is still browsable.
    List fields keep their raw entries; use clean_ingredients() and
    clean_extracted_ingredients() before matching or displaying them.
"""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.fields import as_int, as_text, string_entries

UNTITLED_RECIPE = "Untitled Recipe"


class Recipe(BaseModel):
    """
    A single recipe record.

    Identity is the pair (record_id, display_id): record_id is the opaque
    backend key used for caching and favorites, display_id is the small
    integer used for human-facing numbering and the default sort.
    """
    record_id: str = Field(..., alias="_id", description="Opaque primary key from the backend")
    display_id: int = Field(default=0, alias="id", description="Human-facing recipe number")
    title: str = Field(default="", description="Recipe title, may be empty")
    ingredients: List[Any] = Field(default_factory=list, description="Full ingredient list as stored")
    extracted_ingredients: List[Any] = Field(
        default_factory=list,
        alias="extractedIngredients",
        description="Curated key ingredients used for tag filtering and previews",
    )
    instructions: str = Field(default="", description="Free text, one step per line")
    image_ref: str = Field(default="", alias="imageName", description="Image file name resolved by catalog.images")

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    @field_validator("record_id", mode="before")
    @classmethod
    def _coerce_record_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value
        raise ValueError("recipe is missing a usable _id")

    @field_validator("display_id", mode="before")
    @classmethod
    def _coerce_display_id(cls, value: Any) -> int:
        return as_int(value)

    @field_validator("title", "instructions", "image_ref", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return as_text(value)

    @field_validator("ingredients", "extracted_ingredients", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[Any]:
        if isinstance(value, (list, tuple)):
            return list(value)
        return []

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Recipe":
        """Build a Recipe from a backend document."""
        return cls.model_validate(payload)

    @property
    def display_title(self) -> str:
        return self.title or UNTITLED_RECIPE

    def clean_ingredients(self) -> List[str]:
        """Ingredient entries that are non-empty strings, in order."""
        return string_entries(self.ingredients)

    def clean_extracted_ingredients(self) -> List[str]:
        """Extracted (key) ingredient entries that are non-empty strings, in order."""
        return string_entries(self.extracted_ingredients)

    def instruction_steps(self) -> List[str]:
        """
        Split the instructions into steps.

        Each non-blank line is one step; surrounding whitespace is stripped.
        """
        return [line.strip() for line in self.instructions.splitlines() if line.strip()]

    def preview_tags(self, limit: int) -> Tuple[List[str], int]:
        """
        Get the key ingredients to show on a recipe card.

        Args:
            limit: Maximum number of tags to show

        Returns:
            Tuple of (first `limit` clean extracted ingredients, number of
            remaining ones). Cards render the remainder as "+N".
        """
        tags = self.clean_extracted_ingredients()
        shown = tags[:max(limit, 0)]
        return shown, len(tags) - len(shown)
