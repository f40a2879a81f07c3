# discovery/registry.py
"""
Static relation registry for the root document.

The registry is an explicit, ordered list decided once at startup. Order is
the order links appear in GET /, so keep it stable: reorder only together
with the reference document.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable, NamedTuple, Tuple

from .errors import RegistryError
from .settings import Settings

log = logging.getLogger(__name__)

FEATURES = ("core", "streams", "tasks", "metrics")

_PLACEHOLDER = re.compile(r"\{[^{}]+\}")


class RelationEntry(NamedTuple):
    rel: str
    path: str
    feature: str = "core"


DEFAULT_RELATIONS: Tuple[RelationEntry, ...] = (
    RelationEntry("dashboard", "/dashboard"),
    RelationEntry("audit-records", "/audit-records"),
    RelationEntry("streams/definitions", "/streams/definitions", "streams"),
    RelationEntry("streams/definitions/definition", "/streams/definitions/{name}", "streams"),
    RelationEntry("streams/validation", "/streams/validation/{name}", "streams"),
    RelationEntry("runtime/apps", "/runtime/apps", "streams"),
    RelationEntry("runtime/apps/app", "/runtime/apps/{appId}", "streams"),
    RelationEntry("runtime/apps/instances", "/runtime/apps/{appId}/instances", "streams"),
    RelationEntry("metrics/streams", "/metrics/streams", "metrics"),
    RelationEntry("streams/deployments", "/streams/deployments", "streams"),
    RelationEntry("streams/deployments/{name}", "/streams/deployments/{name}", "streams"),
    RelationEntry("streams/deployments/history/{name}", "/streams/deployments/history/{name}", "streams"),
    RelationEntry("streams/deployments/manifest/{name}/{version}", "/streams/deployments/manifest/{name}/{version}", "streams"),
    RelationEntry("streams/deployments/platform/list", "/streams/deployments/platform/list", "streams"),
    RelationEntry("streams/deployments/rollback/{name}/{version}", "/streams/deployments/rollback/{name}/{version}", "streams"),
    RelationEntry("streams/deployments/update/{name}", "/streams/deployments/update/{name}", "streams"),
    RelationEntry("streams/deployments/deployment", "/streams/deployments/{name}", "streams"),
    RelationEntry("tasks/definitions", "/tasks/definitions", "tasks"),
    RelationEntry("tasks/definitions/definition", "/tasks/definitions/{name}", "tasks"),
    RelationEntry("tasks/executions", "/tasks/executions", "tasks"),
    RelationEntry("tasks/executions/name", "/tasks/executions{?name}", "tasks"),
    RelationEntry("tasks/executions/current", "/tasks/executions/current", "tasks"),
    RelationEntry("tasks/executions/execution", "/tasks/executions/{id}", "tasks"),
    RelationEntry("tasks/validation", "/tasks/validation/{name}", "tasks"),
    RelationEntry("jobs/executions", "/jobs/executions", "tasks"),
    RelationEntry("jobs/executions/name", "/jobs/executions{?name}", "tasks"),
    RelationEntry("jobs/executions/execution", "/jobs/executions/{id}", "tasks"),
    RelationEntry("jobs/executions/execution/steps", "/jobs/executions/{jobExecutionId}/steps", "tasks"),
    RelationEntry("jobs/executions/execution/steps/step", "/jobs/executions/{jobExecutionId}/steps/{stepId}", "tasks"),
    RelationEntry("jobs/executions/execution/steps/step/progress", "/jobs/executions/{jobExecutionId}/steps/{stepId}/progress", "tasks"),
    RelationEntry("jobs/instances/name", "/jobs/instances{?name}", "tasks"),
    RelationEntry("jobs/instances/instance", "/jobs/instances/{id}", "tasks"),
    RelationEntry("tools/parseTaskTextToGraph", "/tools", "tasks"),
    RelationEntry("tools/convertTaskGraphToText", "/tools", "tasks"),
    RelationEntry("jobs/thinexecutions", "/jobs/thinexecutions", "tasks"),
    RelationEntry("apps", "/apps"),
    RelationEntry("about", "/about"),
    RelationEntry("completions/stream", "/completions/stream{?start,detailLevel}", "streams"),
    RelationEntry("completions/task", "/completions/task{?start,detailLevel}", "tasks"),
)


def is_templated(href: str) -> bool:
    """True if href carries a placeholder the caller must expand ({id}, {?name})."""
    return bool(_PLACEHOLDER.search(href))


def _check_template(entry: RelationEntry) -> None:
    depth = 0
    opened_at = -1
    for i, ch in enumerate(entry.path):
        if ch == "{":
            if depth:
                raise RegistryError(f"nested '{{' in template for {entry.rel!r}: {entry.path}")
            depth, opened_at = 1, i
        elif ch == "}":
            if not depth:
                raise RegistryError(f"unbalanced '}}' in template for {entry.rel!r}: {entry.path}")
            if entry.path[opened_at + 1:i].strip("?&+#") == "":
                raise RegistryError(f"empty placeholder in template for {entry.rel!r}: {entry.path}")
            depth = 0
    if depth:
        raise RegistryError(f"unclosed '{{' in template for {entry.rel!r}: {entry.path}")


def validate_entries(entries: Iterable[RelationEntry]) -> Tuple[RelationEntry, ...]:
    seen: set[str] = set()
    out = []
    for entry in entries:
        if not entry.rel:
            raise RegistryError(f"relation with empty name (path={entry.path!r})")
        if not entry.path or not entry.path.startswith("/"):
            raise RegistryError(f"path for {entry.rel!r} must start with '/': {entry.path!r}")
        if entry.feature not in FEATURES:
            raise RegistryError(f"unknown feature {entry.feature!r} for {entry.rel!r}")
        if entry.rel in seen:
            raise RegistryError(f"duplicate relation {entry.rel!r}")
        _check_template(entry)
        seen.add(entry.rel)
        out.append(entry)
    return tuple(out)


def select_entries(entries: Iterable[RelationEntry], features: Iterable[str]) -> Tuple[RelationEntry, ...]:
    enabled = set(features)
    # stream metrics only make sense while streams are served
    if "streams" not in enabled:
        enabled.discard("metrics")
    return tuple(e for e in entries if e.feature in enabled)


def load_registry_file(path: Path | str) -> Tuple[RelationEntry, ...]:
    """
    Read a registry from JSON:

        [{"rel": "streams", "path": "/streams"},
         {"rel": "tasks", "path": "/tasks/{id}", "feature": "tasks"}]
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise RegistryError(f"cannot load registry file {path}: {e}") from e
    if not isinstance(raw, list):
        raise RegistryError(f"registry file {path} must hold a JSON list")

    entries = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or "rel" not in item or "path" not in item:
            raise RegistryError(f"registry file {path}: entry {i} needs 'rel' and 'path'")
        entries.append(RelationEntry(str(item["rel"]), str(item["path"]), str(item.get("feature", "core"))))
    return tuple(entries)


def build_registry(settings: Settings) -> Tuple[RelationEntry, ...]:
    """Startup-only: source → validate → feature filter. Raises RegistryError."""
    if settings.registry_file is not None:
        source = load_registry_file(settings.registry_file)
    else:
        source = DEFAULT_RELATIONS
    entries = select_entries(validate_entries(source), settings.features)
    log.info(
        "relation registry built",
        extra={"context": {"relations": len(entries), "features": sorted(settings.features)}},
    )
    return entries
