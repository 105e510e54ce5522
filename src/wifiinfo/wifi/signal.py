"""
RSSI to signal level classification and SSID normalization.
"""

import re

# Endpoints of the platform signal curve, in dBm
MIN_RSSI = -100
MAX_RSSI = -55

DEFAULT_NUM_LEVELS = 100
# Keeps levels within 0..100
MAX_NUM_LEVELS = 101

# \xNN byte escapes plus escaped backslash and quote, as printed by iw and wpa_cli
SSID_ESCAPE_PATTERN = re.compile(r'\\(?:x([0-9a-fA-F]{2})|([\\"]))')


def calculate_signal_level(rssi: int, num_levels: int = DEFAULT_NUM_LEVELS) -> int:
    """
    Map an RSSI value onto one of ``num_levels`` buckets.

    Linear between MIN_RSSI and MAX_RSSI, clamped to 0 below and to
    ``num_levels - 1`` above.

    Args:
        rssi: Received signal strength in dBm
        num_levels: Number of buckets in the output range

    Returns:
        Level in [0, num_levels - 1]

    Raises:
        ValueError: If num_levels is less than 1
    """
    if num_levels < 1:
        raise ValueError(f"num_levels must be at least 1, got {num_levels}")

    if rssi <= MIN_RSSI:
        return 0
    if rssi >= MAX_RSSI:
        return num_levels - 1

    input_range = MAX_RSSI - MIN_RSSI
    output_range = num_levels - 1
    return int((rssi - MIN_RSSI) * output_range / input_range)


def strip_surrounding_quotes(ssid: str, quote: str = '"') -> str:
    """Remove one pair of surrounding quotes, if both are present."""
    if len(ssid) >= 2 and ssid.startswith(quote) and ssid.endswith(quote):
        return ssid[1:-1]
    return ssid


def decode_ssid_escapes(ssid: str) -> str:
    """
    Turn an escaped SSID from iw or wpa_cli back into the network name.

    Escapes are collected as raw bytes so multi-byte UTF-8 names survive;
    bytes that are not valid UTF-8 become U+FFFD.

    Args:
        ssid: SSID as printed by the tool, e.g. ``Caf\\xc3\\xa9``

    Returns:
        Decoded SSID, e.g. ``Café``
    """
    raw = bytearray()
    pos = 0
    for match in SSID_ESCAPE_PATTERN.finditer(ssid):
        raw += ssid[pos:match.start()].encode('utf-8')
        if match.group(1):
            raw.append(int(match.group(1), 16))
        else:
            raw += match.group(2).encode('ascii')
        pos = match.end()
    raw += ssid[pos:].encode('utf-8')
    return raw.decode('utf-8', errors='replace')
