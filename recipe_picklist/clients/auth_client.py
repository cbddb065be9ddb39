"""
Identity service client — password-grant token exchange.

Endpoint::

    POST {auth_base}/token
        ?grant_type=password&username=...&password=...&country=...
    Auth:    Basic (key:secret)
    Returns: {"access_token": "..."}

The token is returned to the caller rather than cached on the client; the
orchestrator threads it through the run inside an ``AuthContext``.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from recipe_picklist.clients.base import BaseApiClient
from recipe_picklist.errors import AuthenticationError
from recipe_picklist.models.meta import Credentials
from recipe_picklist.models.recipe import TokenResponse

logger = logging.getLogger(__name__)


class AuthClient(BaseApiClient):
    """Exchanges ``Credentials`` for a bearer token.

    Usage::

        with httpx.Client(timeout=30.0) as http:
            token = AuthClient(http, config.auth.base_url).fetch_token(creds)
    """

    error_cls: ClassVar[type[AuthenticationError]] = AuthenticationError
    TOKEN_PATH: ClassVar[str] = "/token"

    def fetch_token(self, credentials: Credentials) -> str:
        """Obtain an access token with the password grant.

        Raises:
            AuthenticationError: On a non-2xx status (message is the response
                body), a transport failure, or a body without ``access_token``.
        """
        resp = self.post(
            self.TOKEN_PATH,
            params={
                "grant_type": "password",
                "username": credentials.username,
                "password": credentials.password.get_secret_value(),
                "country": credentials.country,
            },
            auth=(credentials.key, credentials.secret.get_secret_value()),
        )
        token = self.decode(resp, TokenResponse).access_token
        logger.info("Access token obtained for country=%s", credentials.country)
        return token
