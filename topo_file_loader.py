# topo_file_loader.py
# Handles reading .topo and .json topology files into an EarlyTopology.
import json
import os
from typing import Any

import jsonschema
from lark import Token, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from early_model import EarlyDomain, EarlyGroup, EarlyMember, EarlyTopology
from lark_parser import parse_number, parse_topology_dsl
from topology_errors import MalformedTopologyError

# Schema for JSON topology input. Members may be given as bare names (auto-encoded)
# or as objects with an explicit value.
TOPOLOGY_JSON_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Topology",
    "type": "object",
    "required": ["domains"],
    "additionalProperties": False,
    "properties": {
        "domains": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "members"],
                "additionalProperties": False,
                "properties": {
                    "name": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                    "group": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                    "doc": {"type": "string"},
                    "bits": {"type": "integer", "minimum": 1},
                    "base": {"type": "integer", "minimum": 0},
                    "reserved": {"type": "array", "items": {"type": "integer", "minimum": 0}},
                    "unknown": {"type": "integer", "minimum": 0},
                    "alias": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                    "members": {
                        "type": "array",
                        "items": {
                            "oneOf": [
                                {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                                {
                                    "type": "object",
                                    "required": ["name"],
                                    "additionalProperties": False,
                                    "properties": {
                                        "name": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                                        "value": {"type": "integer", "minimum": 0},
                                        "doc": {"type": "string"},
                                    },
                                },
                            ]
                        },
                    },
                },
            },
        }
    },
}


def _is_strict_integer(checker, instance):
    return isinstance(instance, int) and not isinstance(instance, bool)


# Draft-07 treats 8.0 as an integer; encodings must be real ints.
TopologyJsonValidator = jsonschema.validators.extend(
    jsonschema.Draft7Validator,
    type_checker=jsonschema.Draft7Validator.TYPE_CHECKER.redefine("integer", _is_strict_integer),
)


class TopologyTreeTransformer(Transformer):
    """Builds EarlyTopology objects out of the lark parse tree of a .topo file."""

    def __init__(self, file: str):
        super().__init__()
        self.file = file

    def start(self, items):
        # trailing doc comments with nothing after them are dropped
        return EarlyTopology(self.file, [item for item in items if not isinstance(item, str)])

    def item(self, items):
        return items[0]

    def docs(self, items):
        return "\n".join(str(tok)[3:].strip() for tok in items)

    def group(self, items):
        doc, name_tok = items[0], items[1]
        domains = [item for item in items[2:] if isinstance(item, EarlyDomain)]
        return EarlyGroup(str(name_tok), domains, self.file, name_tok.line, doc=doc)

    def domain_def(self, items):
        doc, name_tok = items[0], items[1]
        members = items[-1]
        attrs = {}
        for key, value in items[2:-1]:
            if key in attrs:
                raise MalformedTopologyError(
                    f"Domain '{name_tok}' declares '{key}' more than once",
                    domain=str(name_tok), file=self.file, line=name_tok.line,
                )
            attrs[key] = value
        return EarlyDomain(
            str(name_tok), members, self.file, name_tok.line,
            bits=attrs.get('bits'),
            base=attrs.get('base'),
            reserved=attrs.get('reserved'),
            unknown=attrs.get('unknown'),
            alias=attrs.get('alias'),
            doc=doc,
        )

    def domain_attr(self, items):
        return items[0]

    def bits_attr(self, items):
        return ('bits', parse_number(items[0]))

    def base_attr(self, items):
        return ('base', parse_number(items[0]))

    def reserved_attr(self, items):
        return ('reserved', [parse_number(tok) for tok in items])

    def unknown_attr(self, items):
        return ('unknown', parse_number(items[0]))

    def alias_attr(self, items):
        return ('alias', str(items[0]))

    def member_list(self, items):
        return [item for item in items if isinstance(item, EarlyMember)]

    def member(self, items):
        doc, name_tok = items[0], items[1]
        value = None
        if len(items) > 2 and isinstance(items[2], Token):
            value = parse_number(items[2])
        return EarlyMember(str(name_tok), value, self.file, name_tok.line, doc=doc)


def load_topology_text(text: str, file: str = "<string>") -> EarlyTopology:
    """Parse .topo text into an EarlyTopology. Syntax errors become MalformedTopologyError."""
    try:
        tree = parse_topology_dsl(text)
    except UnexpectedInput as e:
        raise MalformedTopologyError(
            f"Syntax error at column {e.column}: {str(e).strip().splitlines()[0]}",
            file=file, line=e.line,
        ) from e
    try:
        return TopologyTreeTransformer(file).transform(tree)
    except VisitError as e:
        raise e.orig_exc from e


def load_topology_json_data(data: Any, file: str = "<json>") -> EarlyTopology:
    """Validate a decoded JSON document against TOPOLOGY_JSON_SCHEMA and build an EarlyTopology."""
    try:
        jsonschema.validate(instance=data, schema=TOPOLOGY_JSON_SCHEMA, cls=TopologyJsonValidator)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path)
        raise MalformedTopologyError(f"Schema violation at '/{path}': {e.message}", file=file) from e

    items = []
    for raw_domain in data["domains"]:
        members = []
        for raw_member in raw_domain["members"]:
            if isinstance(raw_member, str):
                members.append(EarlyMember(raw_member, None, file, 0))
            else:
                members.append(EarlyMember(
                    raw_member["name"], raw_member.get("value"), file, 0, doc=raw_member.get("doc", "")
                ))
        items.append(EarlyDomain(
            raw_domain["name"], members, file, 0,
            bits=raw_domain.get("bits"),
            base=raw_domain.get("base"),
            reserved=raw_domain.get("reserved"),
            unknown=raw_domain.get("unknown"),
            alias=raw_domain.get("alias"),
            doc=raw_domain.get("doc", ""),
            category=raw_domain.get("group", ""),
        ))
    return EarlyTopology(file, items)


def load_topo_file(path: str) -> EarlyTopology:
    """Load a topology file. Files ending in .json go through the JSON loader, anything else is .topo text."""
    file = os.path.basename(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise MalformedTopologyError(f"File is not valid UTF-8 (byte {e.start}: {e.reason})", file=file) from e
    if path.lower().endswith('.json'):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedTopologyError(f"Invalid JSON: {e.msg}", file=file, line=e.lineno) from e
        return load_topology_json_data(data, file=file)
    return load_topology_text(text, file=file)
