"""
JSON manifest generator for an Emission.
Produces a JSON document describing every emitted domain block and alias entry, for tools that want the
generated tables without parsing source code. Key order is fixed so the text is stable across runs.
"""
import json
from typing import Any, Dict, Optional

from generators.alias_resolver import AliasTable
from generators.emission_engine import EmittedConstant, Emission

MANIFEST_JSON_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Topology constants manifest",
    "type": "object",
    "required": ["source", "include_unknown_sentinel", "domains", "aliases"],
    "definitions": {
        "constant": {
            "type": "object",
            "required": ["name", "value"],
            "properties": {
                "name": {"type": "string"},
                "variant": {"type": "string"},
                "value": {"type": "integer", "minimum": 0},
                "doc": {"type": "string"},
            },
        },
    },
    "properties": {
        "source": {"type": ["string", "null"]},
        "include_unknown_sentinel": {"type": "boolean"},
        "domains": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "category", "type", "bits", "constants", "count"],
                "properties": {
                    "name": {"type": "string"},
                    "category": {"type": "string"},
                    "type": {"type": "string"},
                    "bits": {"type": "integer", "minimum": 1, "maximum": 64},
                    "doc": {"type": "string"},
                    "constants": {"type": "array", "items": {"$ref": "#/definitions/constant"}},
                    "unknown": {"oneOf": [{"type": "null"}, {"$ref": "#/definitions/constant"}]},
                    "count": {"$ref": "#/definitions/constant"},
                },
            },
        },
        "aliases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["external", "type", "domain"],
                "properties": {
                    "external": {"type": "string"},
                    "type": {"type": "string"},
                    "domain": {"type": "string"},
                },
            },
        },
    },
}


def _constant_to_json(const: Optional[EmittedConstant]) -> Optional[Dict[str, Any]]:
    if const is None:
        return None
    result = {"name": const.name}
    if const.variant:
        result["variant"] = const.variant
    result["value"] = const.value
    if const.doc:
        result["doc"] = const.doc
    return result


def generate_json_manifest(emission: Emission, aliases: AliasTable) -> Dict[str, Any]:
    domains = []
    for block in emission:
        domains.append({
            "name": block.domain.name,
            "category": block.domain.category,
            "type": block.type_name,
            "bits": block.bits,
            "doc": block.doc,
            "constants": [_constant_to_json(c) for c in block.constants],
            "unknown": _constant_to_json(block.unknown),
            "count": _constant_to_json(block.count),
        })
    return {
        "source": emission.source_file,
        "include_unknown_sentinel": emission.config.include_unknown_sentinel,
        "domains": domains,
        "aliases": [
            {"external": entry.external_name, "type": entry.type_name, "domain": entry.domain}
            for entry in aliases
        ],
    }


def generate_json_text(emission: Emission, aliases: AliasTable) -> str:
    return json.dumps(generate_json_manifest(emission, aliases), indent=2) + "\n"
