"""
iw-based connection info provider.
Reads the current link of a Linux wireless interface with `iw dev <iface> link`.
"""

import logging
import re
import subprocess

from wifiinfo.wifi.provider import (
    UNKNOWN_SSID,
    ConnectionInfoError,
    ConnectionInfoProvider,
    WifiConnection,
)
from wifiinfo.wifi.signal import decode_ssid_escapes

logger = logging.getLogger(__name__)

SSID_PATTERN = re.compile(r"^\s*SSID:\s*(.*)$", re.MULTILINE)
SIGNAL_PATTERN = re.compile(r"signal:\s*(-?\d+)\s*dBm")


class IwProvider(ConnectionInfoProvider):
    """Connection info provider using the iw command-line tool."""

    def __init__(self, interface: str = "wlan0", timeout_seconds: int = 5):
        """
        Initialize iw provider.

        Args:
            interface: Wi-Fi interface name (default: wlan0)
            timeout_seconds: Timeout for the iw command
        """
        self.interface = interface
        self.timeout_seconds = timeout_seconds

    def read(self) -> WifiConnection:
        """Read the link state of the configured interface."""
        try:
            result = subprocess.run(
                ['iw', 'dev', self.interface, 'link'],
                capture_output=True,
                text=True,
                errors='replace',
                timeout=self.timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ConnectionInfoError(f"iw link query failed: {e}") from e

        if result.returncode != 0:
            raise ConnectionInfoError(
                f"iw exited with {result.returncode}: {result.stderr.strip()}")

        return self.parse_link(result.stdout)

    def parse_link(self, output: str) -> WifiConnection:
        """
        Parse `iw dev <iface> link` output.

        Args:
            output: Raw command output

        Returns:
            WifiConnection, or the disconnected defaults

        Raises:
            ConnectionInfoError: If a connected link reports no signal
        """
        # The status line comes first; an SSID may contain the same words
        if output.lstrip().startswith('Not connected'):
            logger.debug(f"{self.interface} is not connected")
            return WifiConnection.disconnected()

        signal_match = SIGNAL_PATTERN.search(output)
        if not signal_match:
            raise ConnectionInfoError(
                f"No signal reported for {self.interface}")

        ssid_match = SSID_PATTERN.search(output)
        ssid = UNKNOWN_SSID
        if ssid_match:
            ssid = decode_ssid_escapes(ssid_match.group(1).strip())
        return WifiConnection(ssid, int(signal_match.group(1)))
