"""
Picklist row builder.

Expands each recipe into one ``PicklistRow`` per SKU. Output order mirrors
input order exactly (recipes as fetched, SKUs as listed within each recipe);
nothing is sorted or de-duplicated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from recipe_picklist.models.picklist import PicklistRow
from recipe_picklist.models.recipe import SERVING_TIERS, Recipe, Sku
from recipe_picklist.picklist.ratio import resolve_picks

logger = logging.getLogger(__name__)


def build_row(recipe_title: str, sku: Sku) -> PicklistRow:
    """Build the picklist row for a single SKU of a recipe."""
    missing = [t for t in SERVING_TIERS if t not in sku.servings_ratio]
    if missing:
        logger.debug(
            "SKU %s in '%s' has no ratio for tiers %s; defaulting to 0 picks",
            sku.code, recipe_title, missing,
        )
    return PicklistRow(
        recipe_title=recipe_title,
        sku_code=sku.code,
        sku_name=sku.name,
        picks=tuple(resolve_picks(sku.servings_ratio, tier) for tier in SERVING_TIERS),
    )


def build_rows_for_recipe(recipe: Recipe) -> list[PicklistRow]:
    """Return one row per SKU of ``recipe``, in SKU order."""
    return [build_row(recipe.title, sku) for sku in recipe.skus]


def build_picklist_rows(recipes: Iterable[Recipe]) -> list[PicklistRow]:
    """Return rows for every recipe, in recipe order then SKU order.

    A recipe with no SKUs contributes no rows.
    """
    rows: list[PicklistRow] = []
    for recipe in recipes:
        rows.extend(build_rows_for_recipe(recipe))
    return rows
