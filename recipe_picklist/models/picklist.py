"""
Picklist row model — one output line per (recipe, SKU) pair.

Column layout is fixed; ``PICKLIST_HEADER`` is written verbatim as the CSV
header and ``PicklistRow.as_record()`` yields values in the same order.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from recipe_picklist.models.recipe import SERVING_TIERS

PICKLIST_HEADER: tuple[str, ...] = (
    "name",
    "skus.mapping.value",
    "skus.mapping.name",
    *(f"skus.mapping.picks.{tier}" for tier in SERVING_TIERS),
)


class PicklistRow(BaseModel):
    """Pick counts for one SKU of one recipe.

    Attributes:
        recipe_title: Display title of the recipe.
        sku_code: SKU code.
        sku_name: SKU display name.
        picks: Integer pick count per serving tier, in ``SERVING_TIERS`` order.
    """

    model_config = ConfigDict(frozen=True)

    recipe_title: str
    sku_code: str
    sku_name: str
    picks: tuple[int, ...]

    @field_validator("picks")
    @classmethod
    def validate_picks(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if len(v) != len(SERVING_TIERS):
            raise ValueError(
                f"picks must have {len(SERVING_TIERS)} entries, got {len(v)}."
            )
        if any(p < 0 for p in v):
            raise ValueError(f"picks must be non-negative, got {v}.")
        return v

    def as_record(self) -> list[str]:
        """Return the row as CSV fields in ``PICKLIST_HEADER`` order."""
        return [
            self.recipe_title,
            self.sku_code,
            self.sku_name,
            *(str(p) for p in self.picks),
        ]
