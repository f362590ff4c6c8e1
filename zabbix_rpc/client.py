"""Client for the Zabbix JSON-RPC 2.0 API."""
import json
import httpx
import logging
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from .config import ZabbixSettings, DEFAULT_TIMEOUT
from .jsonrpc.models import JSONRPCRequest, JSONRPCResponse
from .session import SessionState
from .utils.errors import ResponseDecodeError
from .utils.validation import require_credentials

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json-rpc"


class ZabbixAPI:
    """Session-scoped client for the Zabbix API.

    One instance holds the endpoint, the credentials, the auth token and
    the request-id counter, and reuses one ``httpx.Client`` for every
    call. Id allocation and auth updates are locked, but a session is
    meant to be driven by one caller at a time: concurrent calls get
    distinct ids, not ids that follow program order.
    """

    def __init__(
        self,
        url: str,
        user: str,
        password: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the client. No network I/O happens here.

        Args:
            url: API endpoint (e.g., https://zabbix.example.com/api_jsonrpc.php)
            user: User name for ``user.login``
            password: Password for ``user.login``
            timeout: Request timeout in seconds
            verify: Verify TLS certificates
            http_client: Pre-built client to use instead of creating one

        Raises:
            ConfigurationError: If url, user or password is empty
        """
        require_credentials(url, user, password)
        self._url = url
        self._user = user
        self._password = password
        self._state = SessionState()
        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(timeout=timeout, verify=verify)

    @classmethod
    def from_settings(cls, settings: ZabbixSettings, **kwargs: Any) -> "ZabbixAPI":
        return cls(
            settings.url,
            settings.user,
            settings.password,
            timeout=settings.timeout,
            verify=settings.verify,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ZabbixAPI":
        """Build a client from ZABBIX_* environment variables."""
        return cls.from_settings(ZabbixSettings.from_env(), **kwargs)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self):
        """Close the HTTP client if this session created it."""
        if self._owns_client:
            self.client.close()

    @property
    def url(self) -> str:
        return self._url

    @property
    def user(self) -> str:
        return self._user

    @property
    def auth(self) -> str:
        return self._state.snapshot_auth()

    @property
    def loggedin(self) -> bool:
        return self._state.loggedin

    @property
    def last_request_id(self) -> int:
        return self._state.last_request_id

    def request(
        self,
        method: str,
        params: Any = None,
        *,
        authenticated: bool = True,
        result_type: Any = None,
    ) -> JSONRPCResponse:
        """Make a JSON-RPC 2.0 request.

        The request id is taken before anything is sent, so ids keep
        increasing even when a call fails.

        Args:
            method: API method name (e.g., "host.get")
            params: Method parameters, any JSON value or pydantic model
            authenticated: Attach the session token if there is one
            result_type: Validate a successful result into this type

        Returns:
            The response envelope. Check ``response.ok`` (or call
            ``response.raise_for_error()``) before using ``result``.

        Raises:
            httpx.HTTPError: On transport failures, and on non-2xx statuses
                whose body is not an API error envelope
            ResponseDecodeError: If the body is not a response envelope
        """
        request = JSONRPCRequest(
            method=method,
            params=params,
            auth=self._state.snapshot_auth() if authenticated else None,
            id=self._state.next_request_id(),
        )
        body = json.dumps(request.to_payload())
        logger.debug(f"JSON-RPC request {method} id={request.id}")

        try:
            response = self.client.post(
                self._url,
                content=body,
                headers={"Content-Type": CONTENT_TYPE},
            )
            content = response.content
            if response.is_error and not _carries_api_error(content):
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error during JSON-RPC request {method}: {e}")
            raise

        try:
            result = JSONRPCResponse.model_validate_json(content)
        except ValidationError as e:
            raise ResponseDecodeError(
                f"Malformed response to {method}: {e.errors()[0]['msg']}", content
            ) from e

        if result.ok and result_type is not None:
            try:
                typed = TypeAdapter(result_type).validate_python(result.result)
            except ValidationError as e:
                raise ResponseDecodeError(
                    f"Unexpected result type for {method}: {e.errors()[0]['msg']}", content
                ) from e
            result = result.model_copy(update={"result": typed})

        if not result.ok:
            logger.debug(f"JSON-RPC request {method} id={request.id} failed: {result.error}")
        return result

    def login(self) -> bool:
        """Log in with ``user.login`` and keep the returned token.

        Raises:
            ZabbixAPIError: If the server rejects the credentials
        """
        response = self.request(
            "user.login",
            {"user": self._user, "password": self._password},
            authenticated=False,
            result_type=str,
        )
        token = response.raise_for_error("user.login")
        if not token:
            raise ResponseDecodeError("user.login returned an empty token")

        self._state.authenticate(token)
        logger.info(f"Logged in to {self._url} as {self._user}")
        return True

    def logout(self) -> bool:
        """Log out with ``user.logout`` and drop the token.

        On an API error the token is kept, so the caller can retry.

        Raises:
            ZabbixAPIError: If the server refuses the logout
        """
        response = self.request("user.logout", {})
        response.raise_for_error("user.logout")

        self._state.clear()
        logger.info(f"Logged out from {self._url}")
        return True

    def api_version(self) -> str:
        """Return the server's API version (``apiinfo.version``)."""
        response = self.request("apiinfo.version", {}, authenticated=False, result_type=str)
        return response.raise_for_error("apiinfo.version")

    def get_host(self, params: Any) -> JSONRPCResponse:
        """Fetch hosts with given params (``host.get``)."""
        return self.request("host.get", params)

    def get_history(self, params: Any) -> JSONRPCResponse:
        """Fetch history with given params (``history.get``)."""
        return self.request("history.get", params)

    def update_item(self, params: Any) -> JSONRPCResponse:
        """Update items with given params (``item.update``)."""
        return self.request("item.update", params)

    def update_discovery_rule(self, params: Any) -> JSONRPCResponse:
        """Update discovery rules with given params (``discoveryrule.update``)."""
        return self.request("discoveryrule.update", params)

    def get_item(self, params: Any) -> JSONRPCResponse:
        """Fetch items (``item.get``)."""
        return self.request("item.get", params)

    def get_hostgroup(self, params: Any) -> JSONRPCResponse:
        """Fetch host groups (``hostgroup.get``)."""
        return self.request("hostgroup.get", params)

    def get_trigger(self, params: Any) -> JSONRPCResponse:
        """Fetch triggers (``trigger.get``)."""
        return self.request("trigger.get", params)

    def get_trend(self, params: Any) -> JSONRPCResponse:
        """Fetch trends (``trend.get``)."""
        return self.request("trend.get", params)

    def get_event(self, params: Any) -> JSONRPCResponse:
        """Fetch events (``event.get``)."""
        return self.request("event.get", params)


def _carries_api_error(content: bytes) -> bool:
    """True if a non-2xx body is still an envelope with a non-zero error code."""
    try:
        return not JSONRPCResponse.model_validate_json(content).ok
    except ValidationError:
        return False
