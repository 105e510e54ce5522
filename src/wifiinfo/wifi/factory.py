"""
Backend selection for connection info providers.
"""

import logging
import shutil

from wifiinfo.wifi.iw_provider import IwProvider
from wifiinfo.wifi.provider import ConnectionInfoError, ConnectionInfoProvider
from wifiinfo.wifi.termux_provider import TermuxProvider
from wifiinfo.wifi.wpa_provider import WpaSupplicantProvider

logger = logging.getLogger(__name__)

BACKENDS = ('termux', 'iw', 'wpa_supplicant')

# Command probed for each backend when auto-selecting
BACKEND_COMMANDS = {
    'termux': TermuxProvider.COMMAND,
    'iw': 'iw',
    'wpa_supplicant': 'wpa_cli',
}


def _build(backend: str, interface: str,
           timeout_seconds: int) -> ConnectionInfoProvider:
    if backend == 'termux':
        return TermuxProvider(timeout_seconds=timeout_seconds)
    if backend == 'iw':
        return IwProvider(interface, timeout_seconds=timeout_seconds)
    return WpaSupplicantProvider(interface, timeout_seconds=timeout_seconds)


def select_provider(
        backend: str = "auto",
        interface: str = "wlan0",
        timeout_seconds: int = 5) -> ConnectionInfoProvider:
    """
    Select a connection info provider.
    With backend "auto", try Termux:API first, then iw, then wpa_supplicant.

    Args:
        backend: One of "auto", "termux", "iw", "wpa_supplicant"
        interface: Wi-Fi interface name for the Linux backends
        timeout_seconds: Timeout for each OS command

    Returns:
        ConnectionInfoProvider implementation

    Raises:
        ValueError: If the backend name is unknown
        ConnectionInfoError: If auto-selection finds no installed backend
    """
    if backend != 'auto':
        if backend not in BACKENDS:
            raise ValueError(
                f"Unknown provider backend {backend!r}; expected one of "
                f"{', '.join(('auto',) + BACKENDS)}")
        logger.info(f"Using {backend} provider")
        return _build(backend, interface, timeout_seconds)

    for candidate in BACKENDS:
        if shutil.which(BACKEND_COMMANDS[candidate]):
            logger.info(f"Auto-selected {candidate} provider")
            return _build(candidate, interface, timeout_seconds)
        logger.debug(f"{BACKEND_COMMANDS[candidate]} not found")

    raise ConnectionInfoError(
        "No Wi-Fi backend available; install termux-api, iw or wpa_supplicant")
