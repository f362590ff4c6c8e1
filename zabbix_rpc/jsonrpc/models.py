"""JSON-RPC 2.0 request/response models for the Zabbix API."""
import json
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Optional, Literal

from ..utils.errors import ZabbixAPIError


class JSONRPCRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: Any = None
    auth: Optional[str] = None
    id: int

    def to_payload(self) -> dict:
        """Wire representation; ``auth`` is left out when there is no token."""
        payload = {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": _dump_params(self.params),
            "id": self.id,
        }
        if self.auth:
            payload["auth"] = self.auth
        return payload


class JSONRPCError(BaseModel):
    """JSON-RPC 2.0 error model.

    Code 0 means no error; Zabbix leaves the object out of successful
    responses, so a missing error parses to the zero value.
    """

    code: int = 0
    message: str = ""
    data: str = ""

    @field_validator("message", "data", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return json.dumps(value)

    @property
    def is_error(self) -> bool:
        return self.code != ErrorCode.NO_ERROR

    def __str__(self) -> str:
        return f"Error code: {self.code}, message: {self.message}, data: {self.data}"


class JSONRPCResponse(BaseModel):
    """JSON-RPC 2.0 response model."""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: str = "2.0"
    result: Any = None
    error: JSONRPCError = Field(default_factory=JSONRPCError)
    id: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _require_result_or_error(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("response envelope must be a JSON object")
        if "result" not in data and "error" not in data:
            raise ValueError("response envelope has neither 'result' nor 'error'")
        if data.get("error") is None:
            data = {k: v for k, v in data.items() if k != "error"}
        return data

    @property
    def ok(self) -> bool:
        return not self.error.is_error

    def raise_for_error(self, method: Optional[str] = None) -> Any:
        """Return ``result``, or raise ZabbixAPIError if the call failed."""
        if self.error.is_error:
            raise ZabbixAPIError(
                code=self.error.code,
                message=self.error.message,
                data=self.error.data,
                method=method,
            )
        return self.result


class ErrorCode:
    """JSON-RPC 2.0 standard error codes as returned by the Zabbix API."""

    NO_ERROR = 0

    # Standard JSON-RPC 2.0 error codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


def _dump_params(params: Any) -> Any:
    if isinstance(params, BaseModel):
        return params.model_dump(mode="json", by_alias=True, exclude_none=True)
    return params
