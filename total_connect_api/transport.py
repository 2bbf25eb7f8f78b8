"""Send authenticated requests and recover from expired sessions."""

import asyncio
import json
import logging
from typing import Any, Optional

from aiohttp import ClientError, ClientSession

from .auth import Authenticator
from .const import (
    LEGACY_APPLICATION_ID,
    LEGACY_APPLICATION_VERSION,
    LEGACY_NO_SESSION,
    ProtocolGeneration,
    ResultCode,
)
from .dataTypes import (
    AccessToken,
    ApiResponse,
    RequestSpec,
    SessionId,
    SessionMaterial,
)
from .exceptions import APIError, AuthError, NetworkError
from .payloads import result_code_of, xml_to_dict
from .states import classify_result

_LOGGER = logging.getLogger(__name__)

USER_AGENT = "TotalConnect/2.0 (total-connect-api)"


def build_request(
    protocol: ProtocolGeneration,
    material: Optional[SessionMaterial],
    method: str,
    url: str,
    params: Optional[dict[str, Any]] = None,
    json_body: Optional[Any] = None,
    form: Optional[dict[str, Any]] = None,
) -> RequestSpec:
    """Attach the session material and application ids to a request."""
    if protocol is ProtocolGeneration.LEGACY:
        session_id = (
            material.session_id
            if isinstance(material, SessionId)
            else LEGACY_NO_SESSION
        )
        return RequestSpec(
            method,
            url,
            {"User-Agent": USER_AGENT},
            params,
            None,
            {
                **{key: str(value) for key, value in (form or {}).items()},
                "SessionID": session_id,
                "ApplicationID": LEGACY_APPLICATION_ID,
                "ApplicationVersion": LEGACY_APPLICATION_VERSION,
            },
        )

    headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
    if isinstance(material, AccessToken):
        headers["Authorization"] = material.authorization
    return RequestSpec(method, url, headers, params, json_body, form)


class Transport:
    """Request function bound to one account.

    The current session material is an immutable value; refreshing it
    replaces the value, requests built before keep the old one.
    """

    def __init__(
        self,
        http_client: ClientSession,
        authenticator: Authenticator,
        protocol: ProtocolGeneration,
    ) -> None:
        """Create the object."""
        self.http_client = http_client
        self.authenticator = authenticator
        self.protocol = protocol
        self._material: Optional[SessionMaterial] = None
        self._login_lock = asyncio.Lock()

    @property
    def material(self) -> Optional[SessionMaterial]:
        """Session material used for the next request."""
        return self._material

    async def refresh(self) -> Optional[SessionMaterial]:
        """Log in again and swap the session material."""
        material = await self.authenticator.obtain_session()
        if material is not None:
            self._material = material
        return material

    async def _renew(
        self, stale: Optional[SessionMaterial]
    ) -> Optional[SessionMaterial]:
        """Replace stale material, one login at a time.

        Callers queued behind a login that already replaced their stale
        material reuse the new one.
        """
        async with self._login_lock:
            if self._material is not None and self._material is not stale:
                return self._material
            return await self.refresh()

    def is_auth_failure(self, response: ApiResponse) -> bool:
        """Tell whether the server refused the session."""
        if self.protocol is ProtocolGeneration.LEGACY:
            return classify_result(result_code_of(response.body)) is ResultCode.SESSION_EXPIRED
        return response.status == 401

    def _parse(self, response_text: str) -> Any:
        if not response_text:
            return None
        if self.protocol is ProtocolGeneration.LEGACY:
            return xml_to_dict(response_text)
        try:
            return json.loads(response_text)
        except json.JSONDecodeError:
            _LOGGER.error("Problems decoding response %s", response_text)
            return None

    async def _send(self, request: RequestSpec) -> ApiResponse:
        _LOGGER.debug("Making request %s %s", request.method, request.url)
        try:
            async with self.http_client.request(
                request.method,
                request.url,
                headers=request.headers,
                params=request.params,
                json=request.json,
                data=request.form,
            ) as response:
                status = response.status
                response_text: str = await response.text()
        except (ClientError, asyncio.TimeoutError) as err:
            raise NetworkError(f"Connection error with URL {request.url}") from err
        except UnicodeDecodeError as err:
            raise APIError(f"Undecodable response from URL {request.url}") from err

        _LOGGER.debug("Response %s: %s", status, response_text)
        return ApiResponse(status, self._parse(response_text))

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        form: Optional[dict[str, Any]] = None,
    ) -> ApiResponse:
        """Send a request, logging in again and retrying once if refused."""
        material = self._material
        if material is None:
            material = await self._renew(None)

        response = await self._send(
            build_request(self.protocol, material, method, url, params, json_body, form)
        )
        if not self.is_auth_failure(response):
            return response

        _LOGGER.info("Session is expired. Login again")
        material = await self._renew(material)
        if material is None:
            raise AuthError("Unable to log in to Total Connect")

        response = await self._send(
            build_request(self.protocol, material, method, url, params, json_body, form)
        )
        if self.is_auth_failure(response):
            raise AuthError("Session refused right after logging in")
        return response
