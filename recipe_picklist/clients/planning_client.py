"""
Culinary planning service client — batched recipe search.

Endpoint::

    POST {planning_base}/{market}/recipe/search?expand=skus
    Header:  Authorization: Bearer {token}
    Body:    {"codes": ["...", ...]}
    Returns: {"recipes": [{"title": "...", "cskus": [{code, name, servings_ratio}]}]}

All codes go in a single request; there is no pagination.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import ClassVar

import httpx

from recipe_picklist.clients.base import BaseApiClient
from recipe_picklist.errors import FetchError
from recipe_picklist.models.meta import AuthContext
from recipe_picklist.models.recipe import Recipe, RecipeSearchResult

logger = logging.getLogger(__name__)


class PlanningClient(BaseApiClient):
    """Fetches recipes with their SKU ratio tables."""

    error_cls: ClassVar[type[FetchError]] = FetchError
    SEARCH_PATH_TEMPLATE: ClassVar[str] = "/{market}/recipe/search"

    def __init__(self, http: httpx.Client, base_url: str, expand: str = "skus") -> None:
        super().__init__(http, base_url)
        self.expand = expand

    def search_recipes(
        self,
        auth: AuthContext,
        codes: Sequence[str],
    ) -> list[Recipe]:
        """Search recipes by code in ``auth.market``.

        Args:
            auth: Token and market for this run.
            codes: Recipe codes, sent in order (duplicates included).

        Returns:
            Recipes in response order. May be empty; deciding whether that
            is fatal is the caller's job.

        Raises:
            FetchError: On a non-2xx status (message is the response body),
                a transport failure, or an undecodable body.
        """
        resp = self.post(
            self.SEARCH_PATH_TEMPLATE.format(market=auth.market),
            params={"expand": self.expand},
            headers={"Authorization": auth.authorization_header},
            json={"codes": list(codes)},
        )
        recipes = self.decode(resp, RecipeSearchResult).recipes
        logger.info(
            "Planning service returned %d recipes for %d codes (market=%s)",
            len(recipes), len(codes), auth.market,
        )
        return recipes
