"""Custom exception classes for the Zabbix API client."""
from typing import Optional


class ZabbixClientError(Exception):
    """Base exception for Zabbix client errors."""

    pass


class ConfigurationError(ZabbixClientError):
    """Missing or invalid connection settings."""

    pass


class ZabbixAPIError(ZabbixClientError):
    """Error reported by the server inside a well-formed response envelope."""

    def __init__(self, code: int, message: str = "", data: str = "", method: Optional[str] = None):
        self.code = code
        self.message = message
        self.data = data
        self.method = method
        super().__init__(f"Error code: {code}, message: {message}, data: {data}")


class ResponseDecodeError(ZabbixClientError):
    """Response body could not be decoded into a JSON-RPC envelope."""

    def __init__(self, message: str, body: bytes = b""):
        self.body = body
        super().__init__(message)
