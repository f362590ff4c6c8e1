"""Connection settings with environment variable overrides.

Recognised variables:
    ZABBIX_URL          API endpoint, e.g. https://zabbix.example.com/api_jsonrpc.php
    ZABBIX_USER         user name for ``user.login``
    ZABBIX_PASSWORD     password for ``user.login``
    ZABBIX_TIMEOUT      request timeout in seconds (default 30)
    ZABBIX_VERIFY_SSL   "true"/"false" (default true)
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel

DEFAULT_TIMEOUT = 30.0


def _env(environ: Mapping[str, str], name: str, default: str = "") -> str:
    """Return the variable value if set and non-empty, otherwise default."""
    v = environ.get(name)
    return v.strip() if v is not None and v.strip() else default


class ZabbixSettings(BaseModel):
    url: str = ""
    user: str = ""
    password: str = ""
    timeout: float = DEFAULT_TIMEOUT
    verify: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ZabbixSettings":
        """Load settings from the process environment (or a given mapping)."""
        environ = os.environ if environ is None else environ
        return cls(
            url=_env(environ, "ZABBIX_URL"),
            user=_env(environ, "ZABBIX_USER"),
            password=_env(environ, "ZABBIX_PASSWORD"),
            timeout=float(_env(environ, "ZABBIX_TIMEOUT", str(DEFAULT_TIMEOUT))),
            verify=_env(environ, "ZABBIX_VERIFY_SSL", "true").lower() == "true",
        )
