"""Obtain session material for the Total Connect API."""

import asyncio
from datetime import datetime, timedelta
import json
import logging
from typing import Any, Optional

from aiohttp import ClientError, ClientSession
import jwt

from .const import (
    LEGACY_APPLICATION_ID,
    LEGACY_APPLICATION_VERSION,
    OAUTH_CLIENT_ID,
    OAUTH_CLIENT_SECRET,
    ProtocolGeneration,
    ResultCode,
)
from .dataTypes import AccessToken, Credential, SessionId, SessionMaterial
from .domains import ApiDomains
from .payloads import result_of, xml_to_dict
from .states import classify_result

_LOGGER = logging.getLogger(__name__)


def token_expiry(access_token: str, expires_in: Any = None) -> Optional[datetime]:
    """Return when a bearer token expires, if it says so.

    The exp claim of a JWT token wins over the expires_in of the grant.
    Only used for logging, expiry is detected from 401 answers.
    """
    try:
        token = jwt.decode(
            access_token,
            algorithms=["HS256", "RS256"],
            options={"verify_signature": False},
        )
    except jwt.exceptions.PyJWTError:
        token = {}

    if "exp" in token:
        return datetime.fromtimestamp(token["exp"])
    try:
        return datetime.now() + timedelta(seconds=int(expires_in))
    except (TypeError, ValueError):
        return None


class Authenticator:
    """Log in to Total Connect.

    obtain_session never raises, a failed login is reported as None so the
    callers can degrade instead of crashing.
    """

    def __init__(
        self,
        http_client: ClientSession,
        credential: Credential,
        protocol: ProtocolGeneration,
        domains: Optional[ApiDomains] = None,
    ) -> None:
        """Create the object."""
        self.http_client = http_client
        self.credential = credential
        self.protocol = protocol
        self.domains = domains or ApiDomains()

    async def obtain_session(self) -> Optional[SessionMaterial]:
        """Log in and return fresh session material, None on failure."""
        if self.protocol is ProtocolGeneration.LEGACY:
            return await self._login_session_id()
        return await self._login_token()

    async def _post_form(self, url: str, form: dict[str, str]) -> tuple[int, str]:
        async with self.http_client.post(url, data=form) as response:
            return response.status, await response.text()

    async def _login_token(self) -> Optional[AccessToken]:
        """Resource owner password grant against the token endpoint."""
        form = {
            "grant_type": "password",
            "username": self.credential.username,
            "password": self.credential.password,
            "client_id": OAUTH_CLIENT_ID,
            "client_secret": OAUTH_CLIENT_SECRET,
        }
        url = self.domains.get_token_url()
        try:
            status, response_text = await self._post_form(url, form)
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as err:
            _LOGGER.error("Error getting access token: %s", err)
            return None

        if not 200 <= status < 300:
            _LOGGER.error(
                "Error getting access token: status %s, %s", status, response_text
            )
            return None

        try:
            response_dict = json.loads(response_text)
        except json.JSONDecodeError:
            _LOGGER.error("Problems decoding token response %s", response_text)
            return None

        if not isinstance(response_dict, dict) or not response_dict.get("access_token"):
            _LOGGER.error("Token response without access token")
            return None

        access_token = response_dict["access_token"]
        token = AccessToken(
            response_dict.get("token_type") or "Bearer",
            access_token,
            token_expiry(access_token, response_dict.get("expires_in")),
        )
        _LOGGER.debug("Got access token expiring %s", token.expires)
        return token

    async def _login_session_id(self) -> Optional[SessionId]:
        """Legacy login returning a session id."""
        form = {
            "username": self.credential.username,
            "password": self.credential.password,
            "ApplicationID": LEGACY_APPLICATION_ID,
            "ApplicationVersion": LEGACY_APPLICATION_VERSION,
        }
        url = self.domains.get_operation_url("AuthenticateUserLogin")
        try:
            _, response_text = await self._post_form(url, form)
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as err:
            _LOGGER.error("Error getting session id: %s", err)
            return None

        results = result_of(xml_to_dict(response_text), "AuthenticateLoginResults")
        result = classify_result(results.get("ResultCode"))
        if result is not ResultCode.SUCCESS or not results.get("SessionID"):
            _LOGGER.error(
                "Login refused with result code %s", results.get("ResultCode")
            )
            return None

        _LOGGER.debug("Using new session id")
        return SessionId(results["SessionID"])
