"""
Error taxonomy for a picklist run.

Every error is fatal to the run. The CLI catches ``PicklistError`` and maps
it to a one-line message plus exit status 1.
"""

from __future__ import annotations

from typing import Optional


class PicklistError(Exception):
    pass


class InputError(PicklistError):
    pass


class ConfigurationError(InputError):
    pass


class NoCodesFoundError(InputError):
    def __init__(self, source: str):
        super().__init__(f"No codes found in csv file: {source}")
        self.source = source


class HttpResponseError(PicklistError):
    """Non-success HTTP response; the message is the response body verbatim."""

    def __init__(self, body: str, status_code: Optional[int] = None):
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class AuthenticationError(HttpResponseError):
    pass


class FetchError(HttpResponseError):
    pass


class NoRecipesFoundError(FetchError):
    def __init__(self, market: str, code_count: int):
        super().__init__("No recipes found")
        self.market = market
        self.code_count = code_count


class OutputError(PicklistError):
    pass
