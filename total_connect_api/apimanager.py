"""Total Connect API implementation."""

import asyncio
from functools import partial
import logging
from typing import Any, Optional

from aiohttp import ClientSession

from .auth import Authenticator
from .config import (
    CONF_DELAY_CHECK_OPERATION,
    CONF_DELAY_FIRST_CHECK,
    CONF_MAX_POLL_ATTEMPTS,
    CONF_PASSWORD,
    CONF_PROTOCOL,
    CONF_USERNAME,
    validate_config,
)
from .const import (
    ALL_PARTITIONS,
    NO_USER_CODE,
    POLL_DELAYS,
    ArmingState,
    ProtocolGeneration,
    ResultCode,
)
from .dataTypes import (
    ApiResponse,
    CommandResponse,
    Credential,
    Location,
    PollOutcome,
    Topology,
)
from .domains import ApiDomains
from .exceptions import APIError, CommandRejectedError, TotalConnectError
from .payloads import as_list, result_of
from .polling import CommandPoller
from .states import (
    classify_result,
    is_accepted,
    is_pending,
    is_transitional,
    to_generalized,
    to_vendor_arm_target,
)
from .transport import Transport

_LOGGER = logging.getLogger(__name__)


def _check_response(response: ApiResponse, operation: str) -> None:
    if not response.ok:
        raise APIError(f"{operation} failed with status {response.status}")


class ApiManager:
    """Total Connect API.

    Manages one account and the first location and security device found
    on it. The protocol generation is picked at construction and never
    changes for the lifetime of the object.
    """

    def __init__(
        self,
        username: str,
        password: str,
        http_client: ClientSession,
        protocol: ProtocolGeneration = ProtocolGeneration.REST,
        delay_first_check: Optional[float] = None,
        delay_check_operation: Optional[float] = None,
        max_poll_attempts: Optional[int] = None,
    ) -> None:
        """Create the object."""
        self.credential = Credential(username, password)
        self.protocol = protocol
        self.domains = ApiDomains()
        self.http_client = http_client
        self.authenticator = Authenticator(
            http_client, self.credential, protocol, self.domains
        )
        self.transport = Transport(http_client, self.authenticator, protocol)

        first_delay, interval = POLL_DELAYS[protocol]
        self.poller = CommandPoller(
            first_delay if delay_first_check is None else delay_first_check,
            interval if delay_check_operation is None else delay_check_operation,
            max_poll_attempts,
        )

        self.topology = Topology()
        self._resolve_lock = asyncio.Lock()
        self.last_panel_state: Optional[int] = None

    @classmethod
    def from_config(
        cls, http_client: ClientSession, config: dict[str, Any]
    ) -> "ApiManager":
        """Create the object from a configuration mapping."""
        config = validate_config(config)
        return cls(
            config[CONF_USERNAME],
            config[CONF_PASSWORD],
            http_client,
            protocol=config[CONF_PROTOCOL],
            delay_first_check=config[CONF_DELAY_FIRST_CHECK],
            delay_check_operation=config[CONF_DELAY_CHECK_OPERATION],
            max_poll_attempts=config[CONF_MAX_POLL_ATTEMPTS],
        )

    @property
    def legacy(self) -> bool:
        """Return True when talking to the legacy XML API."""
        return self.protocol is ProtocolGeneration.LEGACY

    def to_generalized(self, vendor_code: Any) -> ArmingState:
        """Convert a panel arming code to the generalized state."""
        return to_generalized(vendor_code)

    async def list_locations(self) -> list[Location]:
        """List the locations of the account."""
        if self.legacy:
            return await self._list_locations_legacy()

        response = await self.transport.request(
            "GET", self.domains.get_locations_url()
        )
        _check_response(response, "List locations")

        result: list[Location] = []
        try:
            for item in response.body["locationDetailResult"] or []:
                result.append(
                    Location(
                        int(item["id"]),
                        item.get("name", ""),
                        [int(device["id"]) for device in item.get("devices") or []],
                    )
                )
        except (KeyError, TypeError, ValueError) as err:
            raise APIError("Unexpected list locations response") from err
        return result

    async def _list_locations_legacy(self) -> list[Location]:
        response = await self.transport.request(
            "POST", self.domains.get_operation_url("GetSessionDetails")
        )
        results = result_of(response.body, "SessionDetailResults")
        result_code = classify_result(results.get("ResultCode"))
        if not is_accepted(result_code):
            raise APIError(f"Session details failed with {result_code.name}")

        result: list[Location] = []
        try:
            for locations in as_list(results.get("Locations")):
                for info in as_list(locations.get("LocationInfoBasic")):
                    result.append(
                        Location(
                            int(info["LocationID"]),
                            info.get("LocationName", ""),
                            [int(info["SecurityDeviceID"])],
                        )
                    )
        except (AttributeError, KeyError, TypeError, ValueError) as err:
            raise APIError("Unexpected session details response") from err
        return result

    async def resolve_location(self) -> int:
        """Return the location id, discovering the topology on first use."""
        async with self._resolve_lock:
            if self.topology.resolved:
                return self.topology.location_id

            locations = await self.list_locations()
            if not locations:
                _LOGGER.warning("No locations found for %s", self.credential.username)
                return 0

            first_location = locations[0]
            if not first_location.id:
                _LOGGER.warning(
                    "Location without an id found for %s", self.credential.username
                )
                return 0

            self.topology.location_id = first_location.id
            if first_location.device_ids:
                self.topology.device_id = first_location.device_ids[0]
            _LOGGER.info(
                "Got location %s, device %s",
                self.topology.location_id,
                self.topology.device_id,
            )

            # partitions only come with the full status
            current_state = await self._read_status()
            _LOGGER.info("Updated status %s", current_state.name)

            return self.topology.location_id

    async def _full_status(self) -> tuple[ResultCode, Optional[int]]:
        """Fetch the full panel status and refresh the partition list."""
        if self.legacy:
            return await self._full_status_legacy()

        response = await self.transport.request(
            "GET",
            self.domains.get_locations_url(
                f"{self.topology.location_id}/partitions/fullStatus"
            ),
        )
        _check_response(response, "Full status")
        try:
            # panel wide state, not the first partition's
            panel_state = int(response.body["ArmingState"])
            zones = response.body["PanelStatus"]["Zones"] or []
            # partitions are not returned, use the ones the zones belong to
            partitions = [int(zone["PartitionID"]) for zone in zones]
        except (KeyError, TypeError, ValueError) as err:
            raise APIError("Unexpected full status response") from err

        self.topology.partitions = list(dict.fromkeys(partitions))
        return ResultCode.SUCCESS, panel_state

    async def _full_status_legacy(self) -> tuple[ResultCode, Optional[int]]:
        response = await self.transport.request(
            "POST",
            self.domains.get_operation_url("GetPanelMetaDataAndFullStatusByDeviceID"),
            form={
                "DeviceID": self.topology.device_id,
                "LastSequenceNumber": 0,
                "LastUpdatedTimestampTicks": 0,
                "PartitionID": 1,
            },
        )
        results = result_of(response.body, "PanelMetadataAndStatusResults")
        result_code = classify_result(results.get("ResultCode"))
        if result_code is not ResultCode.SUCCESS:
            return result_code, None

        try:
            status = results["PanelMetadataAndStatus"]
            infos = [
                info
                for partition in as_list(status.get("Partitions"))
                for info in as_list(partition.get("PartitionInfo"))
            ]
            panel_state = int(infos[0]["ArmingState"])
            partitions = [int(info["PartitionID"]) for info in infos]
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as err:
            raise APIError("Unexpected panel status response") from err

        self.topology.partitions = list(dict.fromkeys(partitions))
        return result_code, panel_state

    async def get_status(self) -> ArmingState:
        """Return the current arming state, UNKNOWN when it can't be read."""
        try:
            if not await self.resolve_location():
                return ArmingState.UNKNOWN
        except TotalConnectError as err:
            _LOGGER.error("[get_status] %s", err)
            return ArmingState.UNKNOWN
        return await self._read_status()

    async def _read_status(self) -> ArmingState:
        try:
            result_code, panel_state = await self._full_status()
        except TotalConnectError as err:
            _LOGGER.error("[get_status] %s", err)
            return ArmingState.UNKNOWN

        if result_code is not ResultCode.SUCCESS:
            _LOGGER.error("[get_status] status refused with %s", result_code.name)
            return ArmingState.UNKNOWN

        _LOGGER.info("[get_status] got status %s", panel_state)
        self.last_panel_state = panel_state
        return to_generalized(panel_state)

    def _command_response(self, response: ApiResponse, operation: str) -> CommandResponse:
        body = response.body
        if not isinstance(body, dict) or "ResultCode" not in body:
            _check_response(response, operation)
            raise APIError(f"Unexpected {operation} response")
        try:
            code: Optional[int] = int(body["ResultCode"])
        except (TypeError, ValueError):
            code = None
        return CommandResponse(
            classify_result(body["ResultCode"]), code, body.get("ResultData") or ""
        )

    async def _send_command(self, arm_type: int, disarm: bool) -> CommandResponse:
        endpoint = "disArm" if disarm else "arm"
        data = {
            "armType": arm_type,
            "partitions": list(self.topology.partitions),
            "userCode": NO_USER_CODE,
        }
        _LOGGER.debug("Sending %s %s", endpoint, data)
        response = await self.transport.request(
            "PUT",
            self.domains.get_device_url(
                self.topology.location_id,
                self.topology.device_id,
                f"partitions/{endpoint}",
                v1=False,
            ),
            json_body=data,
        )
        return self._command_response(response, endpoint)

    async def _send_command_legacy(self, arm_type: int, disarm: bool) -> CommandResponse:
        operation = "DisarmSecuritySystem" if disarm else "ArmSecuritySystem"
        form: dict[str, Any] = {
            "DeviceID": self.topology.device_id,
            "LocationID": self.topology.location_id,
            "UserCode": NO_USER_CODE,
        }
        if not disarm:
            form["ArmType"] = arm_type
        response = await self.transport.request(
            "POST", self.domains.get_operation_url(operation), form=form
        )
        return self._command_response(
            ApiResponse(response.status, result_of(response.body, f"{operation}Results")),
            operation,
        )

    async def arm_system(self, target: ArmingState) -> ArmingState:
        """Arm or disarm the panel and wait until it is done.

        Returns the state reached, UNKNOWN when the panel reported a failure
        while the command was running. Raises CommandRejectedError when the
        command is refused outright.
        """
        arm_type = to_vendor_arm_target(target, self.protocol)
        disarm = target is ArmingState.DISARMED
        _LOGGER.info("[arm_system] changing system state to %s", target.name)

        # ensure all metadata is loaded
        if not await self.resolve_location():
            raise APIError("No location available to send commands to")

        if self.legacy:
            command = await self._send_command_legacy(arm_type, disarm)
        else:
            command = await self._send_command(arm_type, disarm)

        _LOGGER.info("[arm_system] status %s (%s)", command.result.name, command.code)
        if not is_accepted(command.result):
            raise CommandRejectedError(command.result, command.code)

        return await self.poller.wait(target, partial(self._check_command, target))

    async def _check_command(self, target: ArmingState) -> PollOutcome:
        """Check once whether the pending command has completed."""
        if self.legacy:
            return await self._check_command_legacy()

        response = await self.transport.request(
            "GET",
            self.domains.get_device_url(
                self.topology.location_id,
                self.topology.device_id,
                f"partitions/lastCommandState/{ALL_PARTITIONS}",
            ),
            params={"PartitionIds": ",".join(str(p) for p in self.topology.partitions)},
        )
        command = self._command_response(response, "lastCommandState")
        _LOGGER.info("[poll] polling returned status %s", command.result.name)

        if is_pending(command.result):
            return PollOutcome(False)
        if command.result is ResultCode.SUCCESS:
            return PollOutcome(True, target)
        _LOGGER.warning("Command to %s ended with %s", target.name, command.result.name)
        return PollOutcome(True, ArmingState.UNKNOWN)

    async def _check_command_legacy(self) -> PollOutcome:
        # the legacy API has no command state, watch the panel state instead
        result_code, panel_state = await self._full_status_legacy()
        if is_pending(result_code):
            return PollOutcome(False)
        if result_code is not ResultCode.SUCCESS:
            _LOGGER.warning("Panel status ended with %s", result_code.name)
            return PollOutcome(True, ArmingState.UNKNOWN)

        self.last_panel_state = panel_state
        state = to_generalized(panel_state)
        _LOGGER.info("[poll] polling state and got %s", panel_state)
        if state is ArmingState.UNKNOWN or is_transitional(panel_state):
            return PollOutcome(False)
        return PollOutcome(True, state)
