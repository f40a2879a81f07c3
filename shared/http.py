# shared/http.py
from __future__ import annotations
from typing import Any, Optional
import httpx

USER_AGENT = "dataflow-discovery/0.1"
JSON_HEADERS = {"Accept": "application/json"}

_client: Optional[httpx.Client] = None


def get_client(timeout: float = 15.0) -> httpx.Client:
    global _client
    if _client is None:
        _client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )
    return _client


def fetch_json(url: str, *, client: httpx.Client | None = None, timeout: float | None = None) -> Any:
    """
    Single GET asking for JSON. No retries: httpx errors (connect, timeout, non-2xx via raise_for_status)
    propagate to the caller, and a body that is not JSON raises ValueError.
    """
    client = client or get_client()
    kwargs: dict[str, Any] = {"headers": JSON_HEADERS}
    if timeout is not None:
        kwargs["timeout"] = timeout
    r = client.get(url, **kwargs)
    r.raise_for_status()
    return r.json()
