# discovery/verifier.py
"""
Discovery verifier: GET / on a running server and compare the body with a
golden reference document.

One request, one comparison, no retries. Each failure has its own type:

  - TransportError     the call did not complete (refused, timeout, non-2xx, not JSON)
  - ReferenceNotFound  the golden document could not be loaded
  - ComparisonMismatch the documents differ (carries every difference)

Typical test usage against an in-process app:

    with TestClient(create_app()) as client:
        verify_root("http://testserver", client=client)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import httpx

from shared.http import fetch_json
from shared.jsoncompare import CompareMode, compare
from .errors import ComparisonMismatch, ReferenceNotFound, TransportError

log = logging.getLogger(__name__)

REFERENCE_PACKAGE = "discovery.reference"
DEFAULT_REFERENCE = "root-controller-result.json"


class VerifierState(str, Enum):
    IDLE = "idle"
    REQUEST_SENT = "request_sent"
    RESPONSE_RECEIVED = "response_received"
    COMPARED = "compared"
    PASSED = "passed"
    FAILED = "failed"


@dataclass
class VerificationResult:
    url: str
    passed: bool
    mode: CompareMode = CompareMode.STRICT


def load_reference(source: str | Path | None = None) -> Any:
    """
    Load the golden document. `source` is a filesystem path if one exists there,
    otherwise a resource name inside the packaged reference directory.
    """
    name = str(source) if source is not None else DEFAULT_REFERENCE
    try:
        path = Path(name)
        if path.is_file():
            text = path.read_text(encoding="utf-8")
        else:
            text = resources.files(REFERENCE_PACKAGE).joinpath(name).read_text(encoding="utf-8")
    except (OSError, ValueError) as e:
        raise ReferenceNotFound(f"reference document {name!r} not found: {e}") from e
    try:
        return json.loads(text)
    except ValueError as e:
        raise ReferenceNotFound(f"reference document {name!r} is not valid JSON: {e}") from e


class DiscoveryVerifier:
    def __init__(
        self,
        base_url: str,
        reference: Any = None,
        *,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
        mode: CompareMode = CompareMode.STRICT,
    ):
        self.url = base_url.rstrip("/") + "/"
        self.reference = reference
        self.client = client
        self.timeout = timeout
        self.mode = CompareMode(mode)
        self.state = VerifierState.IDLE

    def _expected(self) -> Any:
        if self.reference is None or isinstance(self.reference, (str, Path)):
            return load_reference(self.reference)
        return self.reference

    def _fetch(self) -> Any:
        self.state = VerifierState.REQUEST_SENT
        try:
            body = fetch_json(self.url, client=self.client, timeout=self.timeout)
        except httpx.HTTPStatusError as e:
            self.state = VerifierState.FAILED
            raise TransportError(f"GET {self.url} returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self.state = VerifierState.FAILED
            raise TransportError(f"GET {self.url} failed: {e}") from e
        except ValueError as e:
            self.state = VerifierState.FAILED
            raise TransportError(f"GET {self.url} did not return JSON: {e}") from e
        self.state = VerifierState.RESPONSE_RECEIVED
        return body

    def verify(self) -> VerificationResult:
        # reference first: a broken fixture should not cost a request
        try:
            expected = self._expected()
        except ReferenceNotFound:
            self.state = VerifierState.FAILED
            raise
        actual = self._fetch()

        differences = compare(expected, actual, self.mode)
        self.state = VerifierState.COMPARED
        if differences:
            self.state = VerifierState.FAILED
            log.warning(
                "root document mismatch",
                extra={"context": {"url": self.url, "differences": len(differences)}},
            )
            raise ComparisonMismatch(differences, url=self.url)

        self.state = VerifierState.PASSED
        log.info("root document matches reference", extra={"context": {"url": self.url}})
        return VerificationResult(url=self.url, passed=True, mode=self.mode)


def verify_root(base_url: str, reference: Any = None, **kwargs) -> VerificationResult:
    return DiscoveryVerifier(base_url, reference, **kwargs).verify()
