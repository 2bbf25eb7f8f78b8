"""Interface with Total Connect alarms."""

import logging

from .apimanager import ApiManager  # noqa: F401
from .auth import Authenticator  # noqa: F401
from .config import CONFIG_SCHEMA, validate_config  # noqa: F401
from .const import (  # noqa: F401
    ArmingState,
    PanelArmingState,
    ProtocolGeneration,
    ResultCode,
)
from .dataTypes import (  # noqa: F401
    AccessToken,
    ApiResponse,
    Credential,
    Location,
    SessionId,
    Topology,
)
from .domains import ApiDomains  # noqa: F401
from .exceptions import (  # noqa: F401
    APIError,
    AuthError,
    CommandRejectedError,
    InvalidArmTargetError,
    LoginError,
    NetworkError,
    TotalConnectError,
)
from .states import classify_result, to_generalized, to_vendor_arm_target  # noqa: F401
from .transport import Transport, build_request  # noqa: F401

_LOGGER = logging.getLogger(__name__)
