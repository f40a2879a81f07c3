# discovery/schemas.py
"""
Root document model.

Wire format (HAL-style link map, relation name -> link object):

    {"about":   {"href": "http://localhost/about"},
     "tasks/executions/execution":
                {"href": "http://localhost/tasks/executions/{id}", "templated": true}}

`templated` is derived from the href and only serialized when true.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from .registry import RelationEntry, is_templated

# ----------------------------
# Links
# ----------------------------

class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    rel: str
    href: str

    @computed_field  # type: ignore[misc]
    @property
    def templated(self) -> bool:
        return is_templated(self.href)

    def to_payload(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"href": self.href}
        if self.templated:
            out["templated"] = True
        return out


# ----------------------------
# Root document
# ----------------------------

class RootDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    links: Tuple[Link, ...] = ()

    @field_validator("links")
    @classmethod
    def _unique_relations(cls, v: Tuple[Link, ...]) -> Tuple[Link, ...]:
        seen: set[str] = set()
        for link in v:
            if link.rel in seen:
                raise ValueError(f"duplicate relation {link.rel!r}")
            seen.add(link.rel)
        return v

    @property
    def relations(self) -> Tuple[str, ...]:
        return tuple(link.rel for link in self.links)

    def to_payload(self) -> Dict[str, Dict[str, Any]]:
        return {link.rel: link.to_payload() for link in self.links}

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "RootDocument":
        if not isinstance(data, dict):
            raise ValueError(f"root document must be a JSON object, got {type(data).__name__}")
        links = []
        for rel, obj in data.items():
            if not isinstance(obj, dict) or not isinstance(obj.get("href"), str):
                raise ValueError(f"link {rel!r} needs a string 'href'")
            link = Link(rel=rel, href=obj["href"])
            if bool(obj.get("templated", False)) != link.templated:
                raise ValueError(f"link {rel!r}: 'templated' disagrees with href {link.href!r}")
            links.append(link)
        return cls(links=tuple(links))


def build_root_document(entries: Iterable[RelationEntry], base_url: str) -> RootDocument:
    """Registry entries -> RootDocument. Pure: same entries and base, same document."""
    base = base_url.rstrip("/")
    return RootDocument(links=tuple(Link(rel=e.rel, href=base + e.path) for e in entries))


def serialize(document: RootDocument) -> bytes:
    return json.dumps(document.to_payload(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")
