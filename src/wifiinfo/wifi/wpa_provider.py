"""
wpa_supplicant-based connection info provider.
Provides fallback for systems without iw.
Shells out to wpa_cli for status and signal polling.
"""

import logging
import subprocess
from typing import Dict, List

from wifiinfo.wifi.provider import (
    UNKNOWN_SSID,
    ConnectionInfoError,
    ConnectionInfoProvider,
    WifiConnection,
)
from wifiinfo.wifi.signal import decode_ssid_escapes

logger = logging.getLogger(__name__)


class WpaSupplicantProvider(ConnectionInfoProvider):
    """Connection info provider using wpa_supplicant / wpa_cli."""

    def __init__(self, interface: str = "wlan0", timeout_seconds: int = 5):
        """
        Initialize wpa_supplicant provider.

        Args:
            interface: Wi-Fi interface name (default: wlan0)
            timeout_seconds: Timeout for each wpa_cli call
        """
        self.interface = interface
        self.timeout_seconds = timeout_seconds

    def _wpa_cli(self, command: str) -> Dict[str, str]:
        """Run a wpa_cli command and parse its key=value reply."""
        args: List[str] = ['wpa_cli', '-i', self.interface, command]
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                errors='replace',
                timeout=self.timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ConnectionInfoError(f"wpa_cli {command} failed: {e}") from e

        if result.returncode != 0 or result.stdout.strip().startswith('FAIL'):
            raise ConnectionInfoError(
                f"wpa_cli {command} failed: {result.stdout.strip() or result.stderr.strip()}")

        fields = {}
        for line in result.stdout.split('\n'):
            if '=' in line:
                key, value = line.split('=', 1)
                fields[key.strip()] = value.strip()
        return fields

    def read(self) -> WifiConnection:
        """Read SSID from `status` and RSSI from `signal_poll`."""
        status = self._wpa_cli('status')

        if status.get('wpa_state') != 'COMPLETED':
            logger.debug(
                f"{self.interface} wpa_state={status.get('wpa_state')}, not connected")
            return WifiConnection.disconnected()

        signal = self._wpa_cli('signal_poll')
        try:
            rssi = int(signal['RSSI'])
        except (KeyError, ValueError) as e:
            raise ConnectionInfoError(
                f"Unparseable signal_poll reply: {signal}") from e

        ssid = status.get('ssid')
        return WifiConnection(
            decode_ssid_escapes(ssid) if ssid is not None else UNKNOWN_SSID, rssi)
