"""Authentication and request-id state for one Zabbix API session."""
import threading
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Mutable state owned by a single ZabbixAPI instance.

    The token is non-empty exactly when ``loggedin`` is true; both are
    only ever changed together under ``_lock``.
    """
    auth: str = ""
    loggedin: bool = False
    last_request_id: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def next_request_id(self) -> int:
        """Generate next request ID for JSON-RPC."""
        with self._lock:
            self.last_request_id += 1
            return self.last_request_id

    def snapshot_auth(self) -> str:
        with self._lock:
            return self.auth

    def authenticate(self, token: str) -> None:
        """Store a token returned by ``user.login``."""
        if not token:
            raise ValueError("auth token must not be empty")
        with self._lock:
            self.auth = token
            self.loggedin = True
        logger.debug("Session authenticated")

    def clear(self) -> None:
        """Drop the token and mark the session logged out."""
        with self._lock:
            self.auth = ""
            self.loggedin = False
