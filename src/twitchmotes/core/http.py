"""HTTP helpers with cross-platform TLS guidance."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import requests

from twitchmotes.core.exceptions import NetworkFetchError


DEFAULT_USER_AGENT = "twitchmotes-font-builder"


class TLSCertificateError(NetworkFetchError):
    """Raised when TLS certificate verification fails during downloads."""


def _tls_help(url: str) -> str:
    return (
        "TLS certificate verification failed while downloading "
        f"'{url}'. On macOS run the Python 'Install Certificates.command' "
        "(from the python.org installer). On Windows run 'py -m pip install --upgrade certifi'. "
        "On Linux install your 'ca-certificates' package (apt/yum/apk). "
        "Also check system date/time and any proxy or corporate SSL inspection."
    )


def create_session(user_agent: str | None = None) -> requests.Session:
    """Return a session carrying the project user agent."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT
    return session


def http_get(
    session: Any,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    params: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> Any:
    """Issue a GET request, mapping transport failures onto ``NetworkFetchError``."""
    try:
        return session.get(
            url,
            headers=dict(headers or {}),
            params=dict(params) if params else None,
            timeout=timeout,
        )
    except requests.exceptions.SSLError as exc:
        raise TLSCertificateError(_tls_help(url), url=url) from exc
    except requests.RequestException as exc:
        raise NetworkFetchError(f"Request to '{url}' failed: {exc}", url=url) from exc


__all__ = ["DEFAULT_USER_AGENT", "TLSCertificateError", "create_session", "http_get"]
