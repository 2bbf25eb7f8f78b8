import asyncio

from aiohttp import ClientConnectionError
import pytest

from total_connect_api import ApiManager, ArmingState, ProtocolGeneration, Topology

TOKEN_URL = "TC2API.Auth/token"


def _client(http, protocol=ProtocolGeneration.REST) -> ApiManager:
    return ApiManager(
        "user",
        "secret",
        http,
        protocol,
        delay_first_check=0,
        delay_check_operation=0,
    )


def _api_paths(http) -> list[str]:
    return [path for path in http.paths() if not path.endswith(TOKEN_URL)]


@pytest.mark.asyncio
async def test_get_status_resolves_topology_first(rest_http) -> None:
    client = _client(rest_http)

    state = await client.get_status()

    assert state is ArmingState.ARMED_AWAY
    assert client.last_panel_state == 10201
    paths = _api_paths(rest_http)
    # one full status while resolving, one for the answer
    assert paths == [
        "v1/locations",
        "v1/locations/123/partitions/fullStatus",
        "v1/locations/123/partitions/fullStatus",
    ]
    assert client.topology == Topology(123, 456, [1, 2])


@pytest.mark.asyncio
async def test_resolve_location_is_memoised(rest_http) -> None:
    client = _client(rest_http)

    assert await client.resolve_location() == 123
    calls = len(rest_http.calls)
    assert await client.resolve_location() == 123

    assert len(rest_http.calls) == calls
    assert len(rest_http.calls_to("v1/locations")) == 1


@pytest.mark.asyncio
async def test_empty_location_list_reports_no_status(http) -> None:
    http.add(TOKEN_URL, {"token_type": "Bearer", "access_token": "abc"})
    http.add("v1/locations", {"locationDetailResult": []})
    client = _client(http)

    assert await client.resolve_location() == 0
    assert await client.get_status() is ArmingState.UNKNOWN
    assert not client.topology.resolved
    assert http.calls_to("partitions/fullStatus") == []


@pytest.mark.asyncio
async def test_status_failure_returns_unknown(rest_http) -> None:
    client = _client(rest_http)
    await client.resolve_location()
    rest_http.routes["partitions/fullStatus"] = []
    rest_http.add("partitions/fullStatus", exc=ClientConnectionError("down"))

    assert await client.get_status() is ArmingState.UNKNOWN
    assert client.topology.location_id == 123


@pytest.mark.asyncio
async def test_status_error_status_returns_unknown(http) -> None:
    http.add(TOKEN_URL, {"token_type": "Bearer", "access_token": "abc"})
    http.add("v1/locations", {"locationDetailResult": [{"id": 5, "devices": [{"id": 6}]}]})
    http.add("partitions/fullStatus", {"Message": "error"}, status=500)
    client = _client(http)

    assert await client.get_status() is ArmingState.UNKNOWN
    assert client.topology.location_id == 5


@pytest.mark.asyncio
async def test_unexpected_status_body_returns_unknown(http) -> None:
    http.add(TOKEN_URL, {"token_type": "Bearer", "access_token": "abc"})
    http.add("v1/locations", {"locationDetailResult": [{"id": 5, "devices": [{"id": 6}]}]})
    http.add("partitions/fullStatus", {"PanelStatus": {}})
    client = _client(http)

    assert await client.get_status() is ArmingState.UNKNOWN


@pytest.mark.asyncio
async def test_rejected_login_returns_unknown(http) -> None:
    http.add(TOKEN_URL, {"error": "invalid_grant"}, status=400)
    http.add("v1/locations", status=401)
    client = _client(http)

    assert await client.get_status() is ArmingState.UNKNOWN
    assert not client.topology.resolved


@pytest.mark.asyncio
async def test_unknown_panel_code_returns_unknown(rest_http) -> None:
    client = _client(rest_http)
    await client.resolve_location()
    rest_http.routes["partitions/fullStatus"] = []
    rest_http.add("partitions/fullStatus", {"ArmingState": 55555, "PanelStatus": {"Zones": []}})

    assert await client.get_status() is ArmingState.UNKNOWN
    assert client.last_panel_state == 55555


@pytest.mark.asyncio
async def test_list_locations(rest_http) -> None:
    client = _client(rest_http)

    locations = await client.list_locations()

    assert [location.id for location in locations] == [123, 999]
    assert locations[0].name == "Home"
    assert locations[0].device_ids == [456, 789]


@pytest.mark.asyncio
async def test_legacy_get_status(legacy_http) -> None:
    client = _client(legacy_http, ProtocolGeneration.LEGACY)

    assert await client.get_status() is ArmingState.DISARMED

    assert client.topology == Topology(321, 654, [1, 2])
    assert len(legacy_http.calls_to("GetSessionDetails")) == 1
    status_call = legacy_http.calls_to("GetPanelMetaDataAndFullStatusByDeviceID")[0]
    assert status_call.data["DeviceID"] == "654"
    assert status_call.data["SessionID"] == "SESSION-1"


@pytest.mark.asyncio
async def test_legacy_refused_status_returns_unknown(legacy_http, xml) -> None:
    client = _client(legacy_http, ProtocolGeneration.LEGACY)
    await client.resolve_location()
    legacy_http.routes["GetPanelMetaDataAndFullStatusByDeviceID"] = []
    legacy_http.add(
        "GetPanelMetaDataAndFullStatusByDeviceID", text=xml.panel_status(-4002)
    )

    assert await client.get_status() is ArmingState.UNKNOWN


@pytest.mark.asyncio
async def test_legacy_no_locations(http, xml) -> None:
    http.add(
        "AuthenticateUserLogin",
        text=xml.result("AuthenticateLoginResults", 0, "<SessionID>S</SessionID>"),
    )
    http.add("GetSessionDetails", text=xml.result("SessionDetailResults", 0, "<Locations />"))
    client = _client(http, ProtocolGeneration.LEGACY)

    assert await client.resolve_location() == 0
    assert await client.get_status() is ArmingState.UNKNOWN


def test_to_generalized_converter(http) -> None:
    client = _client(http)

    assert client.to_generalized(10209) is ArmingState.ARMED_NIGHT
    assert client.to_generalized(77) is ArmingState.UNKNOWN


@pytest.mark.asyncio
async def test_undecodable_status_returns_unknown(rest_http, decode_error) -> None:
    client = _client(rest_http)
    await client.resolve_location()
    rest_http.routes["partitions/fullStatus"] = []
    rest_http.add("partitions/fullStatus", text_exc=decode_error)

    assert await client.get_status() is ArmingState.UNKNOWN


@pytest.mark.asyncio
async def test_concurrent_callers_resolve_once(http) -> None:
    http.add(TOKEN_URL, {"token_type": "Bearer", "access_token": "abc"}, delay=0.01)
    http.add(
        "v1/locations",
        {"locationDetailResult": [{"id": 5, "devices": [{"id": 6}]}]},
        delay=0.01,
    )
    http.add(
        "partitions/fullStatus",
        {"ArmingState": 10200, "PanelStatus": {"Zones": [{"ZoneID": 1, "PartitionID": 1}]}},
    )
    client = _client(http)

    results = await asyncio.gather(
        client.get_status(), client.get_status(), client.resolve_location()
    )

    assert results == [ArmingState.DISARMED, ArmingState.DISARMED, 5]
    assert len(http.calls_to(TOKEN_URL)) == 1
    assert len(http.calls_to("v1/locations")) == 1
    assert len(http.calls_to("partitions/fullStatus")) == 3
    assert client.topology == Topology(5, 6, [1])


@pytest.mark.asyncio
async def test_location_without_id_is_not_resolved(http) -> None:
    http.add(TOKEN_URL, {"token_type": "Bearer", "access_token": "abc"})
    http.add("v1/locations", {"locationDetailResult": [{"id": 0, "devices": [{"id": 6}]}]})
    client = _client(http)

    assert await client.get_status() is ArmingState.UNKNOWN
    assert await client.resolve_location() == 0
    assert not client.topology.resolved
    assert http.calls_to("partitions/fullStatus") == []
