"""Total Connect API exceptions."""

from typing import Optional

from .const import DEFAULT_RESULT_MESSAGE, RESULT_MESSAGES, ResultCode


class TotalConnectError(Exception):
    """Base class for Total Connect errors."""


class APIError(TotalConnectError):
    """Exception raised when the API answers with something unexpected."""


class NetworkError(TotalConnectError):
    """Exception raised when the request never got an answer."""


class LoginError(TotalConnectError):
    """Exception raised when login fails."""


class AuthError(LoginError):
    """Exception raised when API denies access even after logging in again."""


class InvalidArmTargetError(TotalConnectError, ValueError):
    """Exception raised when asked to arm into a state no command reaches."""


class CommandRejectedError(TotalConnectError):
    """Exception raised when an arm or disarm command is refused."""

    def __init__(self, result: ResultCode, code: Optional[int] = None) -> None:
        """Build the message from the classified result."""
        super().__init__(RESULT_MESSAGES.get(result, DEFAULT_RESULT_MESSAGE))
        self.result = result
        self.code = code
