"""Input validation utilities."""
from typing import Dict

from .errors import ConfigurationError


def require_credentials(url: str, user: str, password: str) -> None:
    """Raise ConfigurationError if any connection credential is empty."""
    provided: Dict[str, str] = {"url": url, "user": user, "password": password}
    missing = [name for name, value in provided.items() if not value]
    if missing:
        raise ConfigurationError(
            f"you have to provide url, user name and password (missing: {', '.join(missing)})"
        )
