"""
HTTP client for the local method channel service.
Used by the UI layer to invoke channel methods across the process boundary.
"""

import logging
from typing import Any, Dict, Optional

import requests

from wifiinfo.channel.method_channel import DEFAULT_CHANNEL_NAME, ResultStatus
from wifiinfo.reader import ConnectionInfo

logger = logging.getLogger(__name__)


class MethodNotImplementedError(Exception):
    """The service does not implement the requested method."""

    def __init__(self, channel: str, method: str):
        super().__init__(f"No implementation found for method {method} on channel {channel}")
        self.channel = channel
        self.method = method


class PlatformError(Exception):
    """The service reported a failure while running the method."""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.message = message


class MethodChannelClient:
    """Client for a method channel exposed by the local service."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8080",
        channel: str = DEFAULT_CHANNEL_NAME,
        timeout_seconds: int = 5,
    ):
        """
        Initialize channel client.

        Args:
            base_url: Service base URL
            channel: Channel name
            timeout_seconds: HTTP request timeout
        """
        self.base_url = base_url.rstrip('/')
        self.channel = channel
        self.timeout_seconds = timeout_seconds

    def invoke_method(self, method: str,
                      arguments: Optional[Any] = None) -> Optional[Dict[str, Any]]:
        """
        Invoke a method on the channel.

        Args:
            method: Method name
            arguments: JSON-serializable arguments

        Returns:
            Success payload

        Raises:
            MethodNotImplementedError: If the method is not implemented
            PlatformError: If the service reports an error
            requests.exceptions.RequestException: On transport failure
        """
        url = f"{self.base_url}/channel/{self.channel}"
        logger.debug(f"Invoking {method} on {url}")
        response = requests.post(
            url,
            json={"method": method, "arguments": arguments},
            timeout=self.timeout_seconds
        )

        try:
            envelope = response.json()
        except ValueError:
            response.raise_for_status()
            raise PlatformError("BAD_RESPONSE", "Service returned a non-JSON body")

        status = envelope.get("status")
        if status == ResultStatus.SUCCESS.value:
            return envelope.get("result")
        if status == ResultStatus.NOT_IMPLEMENTED.value:
            raise MethodNotImplementedError(self.channel, method)

        raise PlatformError(
            envelope.get("code") or f"HTTP_{response.status_code}",
            envelope.get("message"))

    def get_wifi_info(self) -> ConnectionInfo:
        """Fetch the connected network's SSID, RSSI and signal level."""
        return ConnectionInfo.from_dict(self.invoke_method("getWifiInfo"))
