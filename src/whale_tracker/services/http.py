"""
Shared HTTP client for the iNaturalist API.

``create_session()`` mounts a ``TimeoutHTTPAdapter`` on both schemes. The
adapter is where the default timeout lives: ``Session.request`` always
forwards ``timeout=None`` when the caller gives none, so the default has to
be applied at the adapter, after that ``None`` arrives. The same adapter
takes the ``Retry`` policy. The module session retries nothing, so every
failure reaches the user straight away and they decide whether to search
again; tests and scripts can pass their own ``Retry``.

Usage::

    from whale_tracker.services.http import session

    resp = session.get("https://api.inaturalist.org/v1/observations", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from whale_tracker import __version__

DEFAULT_RETRY = Retry(total=0, read=False, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds


class TimeoutHTTPAdapter(HTTPAdapter):
    """``HTTPAdapter`` that fills in a timeout when the request has none."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` for JSON APIs.

    Args:
        retry: Retry policy for the adapter (defaults to ``DEFAULT_RETRY``, none).
        timeout: Seconds applied to requests that don't pass ``timeout=``.
    """
    s = requests.Session()
    adapter = TimeoutHTTPAdapter(max_retries=retry or DEFAULT_RETRY, timeout=timeout)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update(
        {
            "User-Agent": f"whale-tracker/{__version__}",
            "Accept": "application/json",
        }
    )
    return s


#: Module-level session shared by the datasource clients.
session: requests.Session = create_session()
