"""Map vendor codes to the generalized arming and result states."""

import logging
from typing import Union

from .const import (
    ARM_TARGETS,
    ARM_TYPE_MAP,
    MAP_PANEL_STATE_TO_ARMING_STATE,
    MAP_VENDOR_RESULT_CODE,
    TRANSITIONAL_PANEL_STATES,
    ArmingState,
    PanelArmingState,
    ProtocolGeneration,
    ResultCode,
)
from .exceptions import InvalidArmTargetError

_LOGGER = logging.getLogger(__name__)

VendorCode = Union[int, str, None]


def _to_int(code: VendorCode) -> Union[int, None]:
    try:
        return int(code)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def to_generalized(vendor_code: VendorCode) -> ArmingState:
    """Return the generalized state for a panel arming code.

    Codes outside the known set are logged and reported as UNKNOWN.
    """
    code = _to_int(vendor_code)
    try:
        panel_state = PanelArmingState(code)
    except ValueError:
        _LOGGER.warning("Unknown state received: %s", vendor_code)
        return ArmingState.UNKNOWN
    return MAP_PANEL_STATE_TO_ARMING_STATE[panel_state]


def is_transitional(vendor_code: VendorCode) -> bool:
    """Return True while the panel is still arming or disarming."""
    return _to_int(vendor_code) in TRANSITIONAL_PANEL_STATES


def to_vendor_arm_target(
    target: ArmingState, protocol: ProtocolGeneration
) -> int:
    """Return the arm type code a protocol generation expects for a target."""
    if target not in ARM_TARGETS:
        raise InvalidArmTargetError(f"Cannot request arming state {target!r}")
    return ARM_TYPE_MAP[protocol][target]


def classify_result(vendor_result_code: VendorCode) -> ResultCode:
    """Classify a vendor result code, OTHER when not recognised."""
    code = _to_int(vendor_result_code)
    result = MAP_VENDOR_RESULT_CODE.get(code, ResultCode.OTHER)  # type: ignore[arg-type]
    if result is ResultCode.OTHER:
        _LOGGER.debug("Unrecognised result code %s", vendor_result_code)
    return result


def is_pending(result: ResultCode) -> bool:
    """Return True for results that mean the command is still in flight."""
    return result in (ResultCode.INITIATED, ResultCode.POLL_AGAIN)


def is_accepted(result: ResultCode) -> bool:
    """Return True when the panel took the command."""
    return result in (ResultCode.SUCCESS, ResultCode.INITIATED)
