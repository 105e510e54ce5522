"""
Connection info provider interface for abstraction over the host OS Wi-Fi service.
Allows test doubles to be injected in CI environments.
"""

from abc import ABC, abstractmethod

# Reported by Android's WifiManager when no network is associated
UNKNOWN_SSID = "<unknown ssid>"
INVALID_RSSI = -127


class ConnectionInfoError(RuntimeError):
    """Raised when the OS connection record cannot be read."""


class WifiConnection:
    """Raw connection record as reported by the OS."""

    def __init__(self, ssid: str = UNKNOWN_SSID, rssi: int = INVALID_RSSI):
        """
        Args:
            ssid: Network SSID, possibly wrapped in double quotes
            rssi: Received signal strength in dBm
        """
        self.ssid = ssid
        self.rssi = rssi

    @classmethod
    def disconnected(cls) -> "WifiConnection":
        return cls(UNKNOWN_SSID, INVALID_RSSI)

    def __repr__(self) -> str:
        return f"WifiConnection(ssid={self.ssid!r}, rssi={self.rssi})"


class ConnectionInfoProvider(ABC):
    """Abstract base class for OS connection info backends."""

    @abstractmethod
    def read(self) -> WifiConnection:
        """
        Read the active Wi-Fi connection record.

        Returns:
            WifiConnection for the associated network, or the
            disconnected defaults when no network is associated

        Raises:
            ConnectionInfoError: If the OS read fails
        """
