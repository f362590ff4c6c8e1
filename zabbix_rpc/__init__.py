"""Client for the Zabbix JSON-RPC 2.0 API."""
from .client import ZabbixAPI
from .config import ZabbixSettings
from .jsonrpc import JSONRPCRequest, JSONRPCResponse, JSONRPCError, ErrorCode
from .utils.errors import (
    ZabbixClientError,
    ConfigurationError,
    ZabbixAPIError,
    ResponseDecodeError,
)

__all__ = [
    "ZabbixAPI",
    "ZabbixSettings",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCError",
    "ErrorCode",
    "ZabbixClientError",
    "ConfigurationError",
    "ZabbixAPIError",
    "ResponseDecodeError",
]
