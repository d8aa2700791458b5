from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..core.errors import ConfigurationError
from ..core.settings import Settings, get_settings

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_S = 10


class ProviderClient:
    """Shared plumbing for the read-only upstream adapters.

    Subclasses set the provider name, the environment variable holding the key,
    the settings attribute it is read from and the base URL.

    Requests go through `requests.get` unless a session is injected; headers are
    sent per call, so an injected session is never modified.
    """

    provider = ""
    api_key_env = ""
    api_key_setting = ""
    base_url = ""

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        settings: Optional[Settings] = None,
        timeout_s: int = REQUEST_TIMEOUT_S,
    ) -> None:
        self.settings = settings or get_settings()
        if api_key is None:
            api_key = getattr(self.settings, self.api_key_setting, "")
        self.api_key = api_key or ""
        self.timeout_s = timeout_s
        self.session = session

    def default_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                f"{self.provider} API key is required. "
                f"Please configure {self.api_key_env} environment variable."
            )

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """One GET against the provider; raises requests/ValueError errors for the caller to wrap."""
        url = f"{self.base_url}{path}"
        clean = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("%s GET %s params=%s", self.provider, path, sorted(clean))
        http = self.session if self.session is not None else requests
        r = http.get(url, params=clean, headers=self.default_headers(), timeout=self.timeout_s)
        r.raise_for_status()
        return r.json()

    def close(self) -> None:
        if self.session is not None:
            self.session.close()


def describe_failure(exc: Exception) -> str:
    """Caller-safe summary of a request failure.

    requests puts the full URL (query string included, so API keys too) into
    its exception text; only the status code or the exception type is kept.
    """
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    if status is not None:
        reason = getattr(response, "reason", None) or ""
        return f"HTTP {status} {reason}".strip()
    if isinstance(exc, requests.RequestException):
        return type(exc).__name__
    if isinstance(exc, ValueError):
        return "invalid JSON response"
    return type(exc).__name__
