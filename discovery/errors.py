# discovery/errors.py
from __future__ import annotations

from typing import List, Sequence

from shared.jsoncompare import Difference, format_differences


class RegistryError(ValueError):
    """The relation registry is malformed. Raised at startup, never per request."""


class VerificationError(Exception):
    """Base for every failure the discovery verifier reports."""


class TransportError(VerificationError):
    """The GET could not be completed: refused, timed out, non-2xx or not JSON."""


class ReferenceNotFound(VerificationError):
    """The golden document is missing, unreadable or not valid JSON."""


class ComparisonMismatch(VerificationError, AssertionError):
    """Actual and expected root documents differ."""

    def __init__(self, differences: Sequence[Difference], url: str | None = None):
        self.differences: List[Difference] = list(differences)
        self.url = url
        super().__init__(self._render())

    def _relations(self, kind: str) -> List[str]:
        # top-level keys of the root document are relation names
        return [
            d.keys[0] for d in self.differences
            if d.kind == kind and len(d.keys) == 1 and isinstance(d.keys[0], str)
        ]

    def missing_relations(self) -> List[str]:
        return self._relations("missing")

    def unexpected_relations(self) -> List[str]:
        return self._relations("unexpected")

    def _render(self) -> str:
        where = f" at {self.url}" if self.url else ""
        lines = [f"root document{where} does not match reference ({len(self.differences)} difference(s))"]
        missing = self.missing_relations()
        unexpected = self.unexpected_relations()
        if missing:
            lines.append(f"missing from actual: {', '.join(missing)}")
        if unexpected:
            lines.append(f"unexpected in actual: {', '.join(unexpected)}")
        lines.append(format_differences(self.differences))
        return "\n".join(lines)
