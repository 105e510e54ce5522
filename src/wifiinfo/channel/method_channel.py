"""
Named method channel between the UI layer and the connection info reader.
Dispatches enumerated commands to one handler each and returns tagged results.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from wifiinfo.reader import ConnectionInfoReader
from wifiinfo.wifi.provider import ConnectionInfoError

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_NAME = "wifiInfo"


class Command(Enum):
    """Methods the channel understands."""
    GET_WIFI_INFO = "getWifiInfo"

    @classmethod
    def parse(cls, method: str) -> Optional["Command"]:
        try:
            return cls(method)
        except ValueError:
            return None


class ResultStatus(Enum):
    SUCCESS = "success"
    NOT_IMPLEMENTED = "not_implemented"
    ERROR = "error"


@dataclass(frozen=True)
class ChannelResult:
    """Outcome of a single method invocation."""
    status: ResultStatus
    payload: Optional[Dict[str, Any]] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, payload: Dict[str, Any]) -> "ChannelResult":
        return cls(ResultStatus.SUCCESS, payload=payload)

    @classmethod
    def not_implemented(cls) -> "ChannelResult":
        return cls(ResultStatus.NOT_IMPLEMENTED)

    @classmethod
    def error(cls, code: str, message: str) -> "ChannelResult":
        return cls(ResultStatus.ERROR, error_code=code, error_message=message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON envelope sent to the UI layer."""
        if self.status is ResultStatus.SUCCESS:
            return {"status": self.status.value, "result": self.payload}
        if self.status is ResultStatus.ERROR:
            return {
                "status": self.status.value,
                "code": self.error_code,
                "message": self.error_message,
            }
        return {"status": self.status.value}


class MethodChannel:
    """
    Channel registered under a name, answering method calls.

    Each call is independent: a failed read yields an error result for that
    call only.
    """

    def __init__(self, reader: ConnectionInfoReader,
                 name: str = DEFAULT_CHANNEL_NAME):
        """
        Args:
            reader: Connection info reader serving getWifiInfo
            name: Channel name the UI layer addresses
        """
        self.name = name
        self.reader = reader
        self._handlers: Dict[Command, Callable[[Optional[Any]], ChannelResult]] = {
            Command.GET_WIFI_INFO: self._get_wifi_info,
        }

    def invoke(self, method: str,
               arguments: Optional[Any] = None) -> ChannelResult:
        """
        Invoke a method by name.

        Args:
            method: Method name sent by the UI layer
            arguments: Method arguments (unused by getWifiInfo)

        Returns:
            ChannelResult tagged success, not_implemented or error
        """
        command = Command.parse(method)
        if command is None:
            logger.info(f"[{self.name}] method not implemented: {method!r}")
            return ChannelResult.not_implemented()

        logger.debug(f"[{self.name}] invoking {command.value}")
        return self._handlers[command](arguments)

    def _get_wifi_info(self, arguments: Optional[Any]) -> ChannelResult:
        try:
            info = self.reader.get_connection_info()
        except ConnectionInfoError as e:
            logger.error(f"[{self.name}] getWifiInfo failed: {e}")
            return ChannelResult.error("WIFI_UNAVAILABLE", str(e))
        return ChannelResult.success(info.to_dict())
