"""Compact field descriptions handed to the error summary agent."""
from __future__ import annotations

import json
from typing import Any, Dict, Iterator, Tuple

# PPL cannot query alias fields.
UNSUPPORTED_TYPES = {"alias"}


def _flatten(obj: Dict[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    for key, value in obj.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict) and value:
            yield from _flatten(value, path)
        else:
            yield path, value


def _field_types(mappings: Dict[str, Any]) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for index_mapping in mappings.values():
        properties = (index_mapping or {}).get("mappings", {}).get("properties", {})
        for path, value in _flatten(properties):
            segments = path.split(".")
            if len(segments) < 2 or segments[-1] != "type":
                continue
            # field names sit at even positions: name.properties.name....type
            names = segments[:-1:2]
            keywords = segments[1:-1:2]
            if any(keyword != "properties" for keyword in keywords):
                # multi-fields and mapping parameters are not in _source
                continue
            fields.setdefault(".".join(names), str(value))
    return fields


def _sample_source(sample_doc: Dict[str, Any]) -> Dict[str, Any]:
    hits = sample_doc.get("hits", {}).get("hits") or []
    if not hits:
        return {}
    return hits[0].get("_source") or {}


def generate_field_context(mappings: Dict[str, Any], sample_doc: Dict[str, Any]) -> str:
    """Describe every field of ``mappings`` as ``- name: type (sample)``.

    ``mappings`` is the raw ``GET /<index>/_mapping`` body and ``sample_doc``
    the raw body of a ``size=1`` search on the same index.
    """

    sample = dict(_flatten(_sample_source(sample_doc)))
    lines = []
    for name, field_type in _field_types(mappings).items():
        if field_type in UNSUPPORTED_TYPES:
            continue
        value = json.dumps(sample[name], ensure_ascii=False) if name in sample else ""
        lines.append(f"- {name}: {field_type} ({value})")
    return "\n".join(lines)
