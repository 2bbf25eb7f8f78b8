from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from typing import Any, Optional

import pytest

TOKEN_URL = "TC2API.Auth/token"


class _Response:
    def __init__(
        self,
        status: int,
        text: str,
        exc: Optional[BaseException],
        text_exc: Optional[BaseException] = None,
        delay: float = 0,
    ) -> None:
        self.status = status
        self._text = text
        self._exc = exc
        self._text_exc = text_exc
        self._delay = delay

    async def text(self) -> str:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._text_exc is not None:
            raise self._text_exc
        return self._text

    async def __aenter__(self) -> "_Response":
        if self._exc is not None:
            raise self._exc
        return self

    async def __aexit__(self, *args: Any) -> bool:
        return False


class FakeSession:
    """Stand-in for aiohttp.ClientSession answering scripted responses.

    Responses are matched on the end of the url and served in order; the
    last one for a url keeps being served.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[_Response]] = {}
        self.calls: list[SimpleNamespace] = []

    def add(
        self,
        url_suffix: str,
        body: Any = None,
        *,
        status: int = 200,
        text: Optional[str] = None,
        exc: Optional[BaseException] = None,
        text_exc: Optional[BaseException] = None,
        delay: float = 0,
    ) -> None:
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.routes.setdefault(url_suffix, []).append(
            _Response(status, text, exc, text_exc, delay)
        )

    def request(self, method: str, url: str, **kwargs: Any) -> _Response:
        self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
        for suffix, responses in self.routes.items():
            if url.endswith(suffix):
                if len(responses) > 1:
                    return responses.pop(0)
                return responses[0]
        raise AssertionError(f"unexpected request {method} {url}")

    def post(self, url: str, **kwargs: Any) -> _Response:
        return self.request("POST", url, **kwargs)

    def calls_to(self, url_suffix: str) -> list[SimpleNamespace]:
        return [call for call in self.calls if call.url.endswith(url_suffix)]

    def paths(self) -> list[str]:
        return [call.url.rsplit("/api/", 1)[-1].rsplit(".asmx/", 1)[-1] for call in self.calls]


LOCATIONS = {
    "locationDetailResult": [
        {"id": 123, "name": "Home", "devices": [{"id": 456}, {"id": 789}]},
        {"id": 999, "name": "Cabin", "devices": [{"id": 1000}]},
    ]
}

FULL_STATUS = {
    "ArmingState": 10201,
    "PanelStatus": {
        "Zones": [
            {"ZoneID": 1, "PartitionID": 1},
            {"ZoneID": 2, "PartitionID": 2},
            {"ZoneID": 3, "PartitionID": 1},
        ],
        "Partitions": [{"PartitionID": 1, "ArmingState": 10200}],
    },
}


def xml_result(name: str, code: Any, inner: str = "") -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<{name} xmlns="https://services.alarmnet.com/TC2/">'
        f"<ResultCode>{code}</ResultCode><ResultData>data</ResultData>{inner}"
        f"</{name}>"
    )


def panel_status_xml(code: Any, arming_state: Any = 10200) -> str:
    return xml_result(
        "PanelMetadataAndStatusResults",
        code,
        "<PanelMetadataAndStatus><Partitions>"
        f"<PartitionInfo><PartitionID>1</PartitionID><ArmingState>{arming_state}</ArmingState></PartitionInfo>"
        f"<PartitionInfo><PartitionID>2</PartitionID><ArmingState>{arming_state}</ArmingState></PartitionInfo>"
        "</Partitions></PanelMetadataAndStatus>",
    )


SESSION_DETAILS = xml_result(
    "SessionDetailResults",
    0,
    "<Locations><LocationInfoBasic><LocationID>321</LocationID>"
    "<LocationName>Home</LocationName><SecurityDeviceID>654</SecurityDeviceID>"
    "</LocationInfoBasic></Locations>",
)


@pytest.fixture
def http() -> FakeSession:
    return FakeSession()


@pytest.fixture
def rest_http(http: FakeSession) -> FakeSession:
    """Session with a working token endpoint, locations and full status."""
    http.add(TOKEN_URL, {"token_type": "Bearer", "access_token": "abc", "expires_in": 3600})
    http.add("v1/locations", LOCATIONS)
    http.add("partitions/fullStatus", FULL_STATUS)
    return http


@pytest.fixture
def legacy_http(http: FakeSession) -> FakeSession:
    """Session with a working legacy login, session details and panel status."""
    http.add(
        "AuthenticateUserLogin",
        text=xml_result("AuthenticateLoginResults", 0, "<SessionID>SESSION-1</SessionID>"),
    )
    http.add("GetSessionDetails", text=SESSION_DETAILS)
    http.add("GetPanelMetaDataAndFullStatusByDeviceID", text=panel_status_xml(0, 10200))
    return http


@pytest.fixture
def xml() -> SimpleNamespace:
    return SimpleNamespace(result=xml_result, panel_status=panel_status_xml)


@pytest.fixture
def decode_error() -> UnicodeDecodeError:
    """What aiohttp raises for a body that is not valid utf-8."""
    return UnicodeDecodeError("utf-8", b"\xff\xfe{bad", 0, 1, "invalid start byte")
