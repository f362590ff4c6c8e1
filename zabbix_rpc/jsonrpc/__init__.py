"""JSON-RPC 2.0 envelopes for the Zabbix API."""
from .models import JSONRPCRequest, JSONRPCResponse, JSONRPCError, ErrorCode

__all__ = [
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCError",
    "ErrorCode",
]
