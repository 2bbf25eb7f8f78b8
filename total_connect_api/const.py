"""Define constants for the Total Connect API."""

from enum import Enum, IntEnum, auto
from typing import Final

OAUTH_CLIENT_ID: Final[str] = "c7f230ff686b4cc284b6c78a40aa255d"
OAUTH_CLIENT_SECRET: Final[str] = ""

LEGACY_APPLICATION_ID: Final[str] = "14588"
LEGACY_APPLICATION_VERSION: Final[str] = "1.0.0"
LEGACY_NO_SESSION: Final[str] = "-1"

NO_USER_CODE: Final[int] = -1
ALL_PARTITIONS: Final[int] = -1


class ProtocolGeneration(Enum):
    """Upstream protocol generations, never mixed within one client."""

    REST = "rest"
    LEGACY = "legacy"


class ArmingState(IntEnum):
    """Generalized arming state reported to consumers."""

    UNKNOWN = auto()
    DISARMED = auto()
    ARMED_AWAY = auto()
    ARMED_STAY = auto()
    ARMED_NIGHT = auto()
    ALARM_TRIGGERED = auto()


# States a command can request
ARM_TARGETS: Final = (
    ArmingState.DISARMED,
    ArmingState.ARMED_AWAY,
    ArmingState.ARMED_STAY,
    ArmingState.ARMED_NIGHT,
)


class PanelArmingState(IntEnum):
    """Arming state codes as reported by the panel."""

    UNKNOWN = 0
    DISARMED = 10200
    ARMED_AWAY = 10201
    ARMED_AWAY_BYPASS = 10202
    ARMED_STAY = 10203
    ARMED_STAY_BYPASS = 10204
    ARMED_AWAY_INSTANT = 10205
    ARMED_AWAY_INSTANT_BYPASS = 10206
    # door/window sensors, also the Medical and Police panel buttons
    ALARMING_PERIMETER = 10207
    ARMED_NIGHT = 10209
    ARMED_NIGHT_BYPASS = 10210
    DISARMED_BYPASS = 10211
    # smoke detectors, also the Fire panel button
    ALARMING_FIRE_SMOKE = 10212
    ALARMING_CARBON_MONOXIDE = 10213
    # zone(s) faulted
    DISARMED_NOT_READY = 10214
    ARMED_STAY_NIGHT = 10218
    ARMED_STAY_NIGHT_BYPASS = 10219
    ARMED_STAY_NIGHT_INSTANT = 10220
    ARMED_STAY_NIGHT_INSTANT_BYPASS = 10221
    ARMED_CUSTOM_BYPASS = 10223
    # Lynx Touch 7000, previously reported as 10203
    ARMED_STAY_LYNX_TOUCH = 10226
    ARMED_STAY_PROA7 = 10230
    ARMED_STAY_BYPASS_PROA7 = 10231
    ARMED_STAY_INSTANT_PROA7 = 10232
    ARMED_STAY_INSTANT_BYPASS_PROA7 = 10233
    ARMING = 10307
    DISARMING = 10308


MAP_PANEL_STATE_TO_ARMING_STATE = {
    PanelArmingState.UNKNOWN: ArmingState.UNKNOWN,
    PanelArmingState.ARMING: ArmingState.DISARMED,
    PanelArmingState.DISARMED: ArmingState.DISARMED,
    PanelArmingState.DISARMED_BYPASS: ArmingState.DISARMED,
    PanelArmingState.DISARMED_NOT_READY: ArmingState.DISARMED,
    PanelArmingState.DISARMING: ArmingState.DISARMED,
    PanelArmingState.ARMED_AWAY: ArmingState.ARMED_AWAY,
    PanelArmingState.ARMED_AWAY_BYPASS: ArmingState.ARMED_AWAY,
    PanelArmingState.ARMED_AWAY_INSTANT: ArmingState.ARMED_AWAY,
    PanelArmingState.ARMED_AWAY_INSTANT_BYPASS: ArmingState.ARMED_AWAY,
    PanelArmingState.ARMED_STAY: ArmingState.ARMED_STAY,
    PanelArmingState.ARMED_STAY_BYPASS: ArmingState.ARMED_STAY,
    PanelArmingState.ARMED_CUSTOM_BYPASS: ArmingState.ARMED_STAY,
    PanelArmingState.ARMED_STAY_LYNX_TOUCH: ArmingState.ARMED_STAY,
    PanelArmingState.ARMED_STAY_PROA7: ArmingState.ARMED_STAY,
    PanelArmingState.ARMED_STAY_BYPASS_PROA7: ArmingState.ARMED_STAY,
    PanelArmingState.ARMED_NIGHT: ArmingState.ARMED_NIGHT,
    PanelArmingState.ARMED_NIGHT_BYPASS: ArmingState.ARMED_NIGHT,
    PanelArmingState.ARMED_STAY_NIGHT: ArmingState.ARMED_NIGHT,
    PanelArmingState.ARMED_STAY_NIGHT_BYPASS: ArmingState.ARMED_NIGHT,
    PanelArmingState.ARMED_STAY_NIGHT_INSTANT: ArmingState.ARMED_NIGHT,
    PanelArmingState.ARMED_STAY_NIGHT_INSTANT_BYPASS: ArmingState.ARMED_NIGHT,
    PanelArmingState.ARMED_STAY_INSTANT_PROA7: ArmingState.ARMED_NIGHT,
    PanelArmingState.ARMED_STAY_INSTANT_BYPASS_PROA7: ArmingState.ARMED_NIGHT,
    PanelArmingState.ALARMING_PERIMETER: ArmingState.ALARM_TRIGGERED,
    PanelArmingState.ALARMING_FIRE_SMOKE: ArmingState.ALARM_TRIGGERED,
    PanelArmingState.ALARMING_CARBON_MONOXIDE: ArmingState.ALARM_TRIGGERED,
}

TRANSITIONAL_PANEL_STATES = frozenset(
    {PanelArmingState.ARMING, PanelArmingState.DISARMING}
)


class ResultCode(IntEnum):
    """Classified result of an API call."""

    SUCCESS = auto()
    INITIATED = auto()
    POLL_AGAIN = auto()
    SESSION_EXPIRED = auto()
    TIMEOUT = auto()
    INVALID_USER_CODE = auto()
    COMMUNICATION_FAILURE = auto()
    INVALID_LOCATION = auto()
    CONNECTION_ERROR = auto()
    OTHER = auto()


MAP_VENDOR_RESULT_CODE = {
    0: ResultCode.SUCCESS,
    4500: ResultCode.INITIATED,
    4501: ResultCode.POLL_AGAIN,
    -102: ResultCode.SESSION_EXPIRED,
    -4101: ResultCode.TIMEOUT,
    -4106: ResultCode.INVALID_USER_CODE,
    -4108: ResultCode.COMMUNICATION_FAILURE,
    -4002: ResultCode.INVALID_LOCATION,
    -4008: ResultCode.CONNECTION_ERROR,
}

RESULT_MESSAGES = {
    ResultCode.TIMEOUT: "Timed out connecting to the system",
    ResultCode.INVALID_USER_CODE: "The user code was rejected by the system",
    ResultCode.COMMUNICATION_FAILURE: "There was an error communicating with the system",
    ResultCode.INVALID_LOCATION: "Invalid location supplied",
    ResultCode.CONNECTION_ERROR: "A connection error occurred",
    ResultCode.SESSION_EXPIRED: "The session has expired",
}
DEFAULT_RESULT_MESSAGE: Final[str] = "An error occurred"

# Arm type codes for each protocol generation
REST_ARM_TYPES = {
    ArmingState.ARMED_AWAY: 0,
    ArmingState.ARMED_STAY: 1,
    ArmingState.ARMED_NIGHT: 2,
    ArmingState.DISARMED: -1,
}

LEGACY_ARM_TYPES = {
    ArmingState.DISARMED: 0,
    ArmingState.ARMED_STAY: 1,
    ArmingState.ARMED_NIGHT: 2,
    ArmingState.ARMED_AWAY: 3,
}

ARM_TYPE_MAP = {
    ProtocolGeneration.REST: REST_ARM_TYPES,
    ProtocolGeneration.LEGACY: LEGACY_ARM_TYPES,
}

# (first delay, delay between checks) in seconds
POLL_DELAYS = {
    ProtocolGeneration.REST: (1, 2),
    ProtocolGeneration.LEGACY: (1, 1),
}
