"""
Connection info reader.
Reads the active connection record and shapes it for the UI layer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict

from wifiinfo.wifi.provider import ConnectionInfoProvider
from wifiinfo.wifi.signal import (
    DEFAULT_NUM_LEVELS,
    MAX_NUM_LEVELS,
    calculate_signal_level,
    strip_surrounding_quotes,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionInfo:
    """Connected network as seen by the UI layer."""
    ssid: str
    rssi: int           # dBm, as reported
    level: int          # 0..num_levels - 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "ssid": self.ssid,
            "rssi": self.rssi,
            "level": self.level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionInfo":
        return cls(
            ssid=str(data["ssid"]),
            rssi=int(data["rssi"]),
            level=int(data["level"]),
        )


class ConnectionInfoReader:
    """Builds ConnectionInfo values from a connection info provider."""

    def __init__(
        self,
        provider: ConnectionInfoProvider,
        num_levels: int = DEFAULT_NUM_LEVELS,
        classifier: Callable[[int, int], int] = calculate_signal_level,
    ):
        """
        Initialize reader.

        Args:
            provider: Backend reading the OS connection record
            num_levels: Number of signal level buckets
            classifier: RSSI to level function, called as classifier(rssi, num_levels)

        Raises:
            ValueError: If num_levels is outside 1..MAX_NUM_LEVELS
        """
        if not 1 <= num_levels <= MAX_NUM_LEVELS:
            raise ValueError(
                f"num_levels must be between 1 and {MAX_NUM_LEVELS}, got {num_levels}")

        self.provider = provider
        self.num_levels = num_levels
        self.classifier = classifier

    def get_connection_info(self) -> ConnectionInfo:
        """
        Read the currently connected network.

        Returns:
            Fresh ConnectionInfo

        Raises:
            ConnectionInfoError: If the provider cannot read the OS record
        """
        record = self.provider.read()

        info = ConnectionInfo(
            ssid=strip_surrounding_quotes(record.ssid),
            rssi=record.rssi,
            level=self.classifier(record.rssi, self.num_levels),
        )
        logger.debug(f"Read {info}")
        return info
