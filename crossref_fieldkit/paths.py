"""Compiled field-path patterns that pull values out of Crossref records."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Sequence

from crossref_fieldkit.schema import FieldType, field_type

log = logging.getLogger(__name__)

_ARRAY_WILDCARD = object()
_RELATION_WILDCARD = ("relation", "*")


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _finalize(node: Any) -> Any:
    """Keep primitives as they are; turn objects and arrays into compact JSON text."""
    if isinstance(node, (dict, list)):
        return json.dumps(node, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    return node


class PathPattern:
    """A dotted field path expanded with array wildcards taken from the schema."""

    def __init__(self, field_path: Sequence[str]) -> None:
        parts: list[object] = []
        schema_path = ""
        for part in field_path:
            schema_path = _join(schema_path, part)
            parts.append(part)
            if field_type(schema_path) is FieldType.ARRAY:
                parts.append(_ARRAY_WILDCARD)
        self.parts: tuple[object, ...] = tuple(parts)
        self.field_name: str = ".".join(field_path)

    def __repr__(self) -> str:
        return f"PathPattern({self.field_name!r})"

    def apply(self, record: Any) -> list[tuple[str, Any]]:
        """Return (concrete path, value) pairs matched in the record."""
        results: list[tuple[str, Any]] = []
        depth = len(self.parts)
        stack: list[tuple[Any, str, int]] = [(record, "", 0)]

        while stack:
            node, path, idx = stack.pop()
            if idx >= depth:
                results.append((path, _finalize(node)))
                continue

            part = self.parts[idx]
            if part is _ARRAY_WILDCARD:
                if isinstance(node, list):
                    stack.extend(
                        (item, f"{path}[{position}]", idx + 1)
                        for position, item in enumerate(node)
                    )
                elif isinstance(node, dict):
                    log.warning(
                        "Expected array but found object at path: %s. "
                        "Processing as single item.",
                        path,
                    )
                    stack.append((node, path, idx + 1))
            elif isinstance(node, dict) and part in node:
                stack.append((node[part], _join(path, part), idx + 1))
            elif part == "*" and isinstance(node, dict) and path.startswith("relation"):
                if idx + 1 < depth:
                    stack.extend(
                        (value, _join(path, key), idx + 1)
                        for key, value in sorted(node.items())
                    )
        return results


def parse_field_specifications(field_specs: str) -> list[list[str]]:
    """Split a comma-separated list of dotted field paths into their parts."""
    specs = []
    for spec in field_specs.split(","):
        parts = [part.strip() for part in spec.strip().split(".")]
        parts = [part for part in parts if part]
        if parts:
            specs.append(parts)
    return specs


def initialize_path_patterns(
    field_paths: Iterable[Sequence[str]],
) -> dict[str, PathPattern]:
    """Compile patterns keyed by dotted path, adding implied relation wildcards."""
    patterns: dict[str, PathPattern] = {}
    for field_path in field_paths:
        key = ".".join(field_path)
        if key:
            patterns[key] = PathPattern(field_path)
        else:
            log.warning("Skipping invalid empty field path specification.")

    if any(key.startswith("relation.") for key in patterns):
        if "relation.*" not in patterns:
            log.info(
                "Adding implicit 'relation.*' pattern due to specific relation field request."
            )
            patterns["relation.*"] = PathPattern(_RELATION_WILDCARD)
        relation_keys = [key for key in patterns if key.startswith("relation.")]
        for key in relation_keys:
            parts = key.split(".")
            if len(parts) > 2 and parts[1] != "*":
                wildcard_parts = [*_RELATION_WILDCARD, *parts[2:]]
                wildcard_key = ".".join(wildcard_parts)
                if wildcard_key not in patterns:
                    log.info("Adding implicit wildcard pattern: %s", wildcard_key)
                    patterns[wildcard_key] = PathPattern(wildcard_parts)
    return patterns