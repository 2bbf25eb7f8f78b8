"""Public datatypes for the Total Connect API."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from .const import ArmingState, ResultCode


@dataclass(frozen=True)
class Credential:
    """Account username and password."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class AccessToken:
    """Bearer token obtained from the OAuth token endpoint."""

    token_type: str
    access_token: str
    expires: Optional[datetime] = None

    @property
    def authorization(self) -> str:
        """Value for the Authorization header."""
        return f"{self.token_type} {self.access_token}"


@dataclass(frozen=True)
class SessionId:
    """Session identifier obtained from the legacy login call."""

    session_id: str


SessionMaterial = Union[AccessToken, SessionId]


@dataclass
class Topology:
    """Define the location, device and partitions used for commands."""

    location_id: int = 0
    device_id: int = 0
    partitions: list[int] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        """Return True once a location has been selected."""
        return self.location_id != 0


@dataclass
class Location:
    """Define a Total Connect location."""

    id: int = 0
    name: str = ""
    device_ids: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to send one request."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: Optional[dict[str, Any]] = None
    json: Optional[Any] = None
    form: Optional[dict[str, Any]] = None


@dataclass
class ApiResponse:
    """HTTP status and parsed body of a response."""

    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        """Return True for 2xx statuses."""
        return 200 <= self.status < 300


@dataclass
class CommandResponse:
    """Define the immediate answer to an arm or disarm command."""

    result: ResultCode
    code: Optional[int] = None
    data: str = ""


@dataclass
class PollOutcome:
    """Verdict of a single check of a pending command."""

    done: bool
    state: ArmingState = ArmingState.UNKNOWN
