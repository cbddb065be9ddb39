"""
Recipe and SKU models decoded from the culinary planning service.

``Recipe`` holds a display title and the ordered list of ``Sku`` component
items. Each ``Sku`` carries a ``servings_ratio`` table keyed by serving tier.
The wire format keys the table by the tier as a string (``{"2": 1.5}``); the
model normalises those keys to ``int`` so lookups use the tier directly.

Only tiers in ``SERVING_TIERS`` are ever queried when building picklists.
Tiers outside that range are kept on the model but ignored downstream.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

SERVING_TIERS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)


class Sku(BaseModel):
    """One component item of a recipe.

    Attributes:
        code: SKU code, e.g. ``"IT-10-12345-1"``.
        name: Display name of the item.
        servings_ratio: Serving tier → fractional units required. A tier that
            is absent means no ratio is known for it.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    code: str
    name: str
    servings_ratio: dict[int, float] = Field(default_factory=dict)

    @field_validator("servings_ratio", mode="before")
    @classmethod
    def normalise_tier_keys(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            return v
        table: dict[int, Any] = {}
        for key, ratio in v.items():
            try:
                tier = int(key)
            except (TypeError, ValueError):
                logger.debug("Ignoring non-integer serving tier %r", key)
                continue
            if ratio is None:
                continue
            table[tier] = ratio
        return table

    @field_validator("servings_ratio")
    @classmethod
    def validate_non_negative(cls, v: dict[int, float]) -> dict[int, float]:
        for tier, ratio in v.items():
            if not math.isfinite(ratio) or ratio < 0:
                raise ValueError(
                    f"servings_ratio for tier {tier} must be a finite number >= 0, got {ratio}."
                )
        return v


class Recipe(BaseModel):
    """A recipe and its SKUs, in the order returned by the service.

    The service names the SKU list ``cskus``; ``skus`` is accepted too.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    skus: list[Sku] = Field(default_factory=list, alias="cskus")


class RecipeSearchResult(BaseModel):
    """Body of ``POST /{market}/recipe/search``."""

    model_config = ConfigDict(frozen=True)

    recipes: list[Recipe]


class TokenResponse(BaseModel):
    """Body of ``POST /token`` on the identity service."""

    model_config = ConfigDict(frozen=True)

    access_token: str
