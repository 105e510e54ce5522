"""
Android connection info provider backed by Termux:API.
`termux-wifi-connectioninfo` dumps the platform WifiInfo record as JSON,
with the SSID quoted the way the Android Wi-Fi service reports it.
"""

import json
import logging
import subprocess

from wifiinfo.wifi.provider import (
    INVALID_RSSI,
    UNKNOWN_SSID,
    ConnectionInfoError,
    ConnectionInfoProvider,
    WifiConnection,
)

logger = logging.getLogger(__name__)


class TermuxProvider(ConnectionInfoProvider):
    """Connection info provider using termux-wifi-connectioninfo."""

    COMMAND = 'termux-wifi-connectioninfo'

    def __init__(self, timeout_seconds: int = 5):
        self.timeout_seconds = timeout_seconds

    def read(self) -> WifiConnection:
        try:
            result = subprocess.run(
                [self.COMMAND],
                capture_output=True,
                text=True,
                errors='replace',
                timeout=self.timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ConnectionInfoError(f"{self.COMMAND} failed: {e}") from e

        if result.returncode != 0:
            raise ConnectionInfoError(
                f"{self.COMMAND} exited with {result.returncode}: {result.stderr.strip()}")

        # Termux:API prints nothing when the location permission is missing
        if not result.stdout.strip():
            raise ConnectionInfoError(
                f"{self.COMMAND} returned no data; is the location permission granted?")

        try:
            info = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ConnectionInfoError(
                f"Failed to parse {self.COMMAND} output: {e}") from e

        if not isinstance(info, dict):
            raise ConnectionInfoError(f"Unexpected {self.COMMAND} output: {info!r}")

        logger.debug(f"supplicant_state={info.get('supplicant_state')}")
        ssid = info.get('ssid')
        rssi = info.get('rssi')
        try:
            rssi = int(rssi) if rssi is not None else INVALID_RSSI
        except (TypeError, ValueError) as e:
            raise ConnectionInfoError(f"Invalid rssi {rssi!r}") from e
        return WifiConnection(ssid if ssid is not None else UNKNOWN_SSID, rssi)
