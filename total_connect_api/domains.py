"""ApiDomain dictionary."""

from typing import Union

from .const import ProtocolGeneration


class ApiDomains:
    """Define the base url for each protocol generation."""

    def __init__(self) -> None:
        """Define default constructor."""
        self.domains = {
            ProtocolGeneration.REST: "https://rs.alarmnet.com/TC2API.TCResource/api",
            ProtocolGeneration.LEGACY: "https://rs.alarmnet.com/TC21api/tc2.asmx",
        }
        self.token_url = "https://rs.alarmnet.com/TC2API.Auth/token"

    def get_token_url(self) -> str:
        """Return the OAuth token endpoint."""
        return self.token_url

    def get_locations_url(self, endpoint: str = "", v1: bool = True) -> str:
        """Build a REST url under v1/locations or v2/locations."""
        end = endpoint.lstrip("/")
        version = "v1" if v1 else "v2"
        url = f"{self.domains[ProtocolGeneration.REST]}/{version}/locations"
        if end:
            url = f"{url}/{end}"
        return url

    def get_operation_url(self, operation: str) -> str:
        """Build a legacy url for a tc2.asmx operation."""
        return f"{self.domains[ProtocolGeneration.LEGACY]}/{operation}"

    def get_device_url(
        self,
        location_id: Union[int, str],
        device_id: Union[int, str],
        endpoint: str,
        v1: bool = True,
    ) -> str:
        """Build a REST url scoped to a location and device."""
        return self.get_locations_url(
            f"{location_id}/devices/{device_id}/{endpoint.lstrip('/')}", v1
        )
