"""
Python 3 generator for an Emission.
Outputs an IntEnum per domain, a module-level count constant per domain, and module-level aliases for the
external names. With the unknown sentinel on, each enum maps unrecognized values onto its unknown member.
"""
from generators.alias_resolver import AliasTable
from generators.emission_engine import Emission
from generators.generator_utils import (
    PYTHON_RESERVED_KEYWORDS,
    banner_lines,
    check_external_name,
    doc_lines,
    sanitize_identifier,
)


def generate_python3_code(emission: Emission, aliases: AliasTable) -> str:
    lines = banner_lines(emission.source_file, "#")
    lines.append("from enum import IntEnum")

    for block in emission:
        type_name = sanitize_identifier(block.type_name, PYTHON_RESERVED_KEYWORDS)
        lines.append("")
        lines.append("")
        lines.extend(doc_lines(block.doc, "#"))
        lines.append(f"class {type_name}(IntEnum):")
        for const in block.constants:
            lines.extend(doc_lines(const.doc, "#", indent="    "))
            lines.append(f"    {const.name} = {const.value}")
        if block.unknown is not None:
            lines.extend(doc_lines(block.unknown.doc, "#", indent="    "))
            lines.append(f"    {block.unknown.name} = {block.unknown.value}")
            lines.append("")
            lines.append("    @classmethod")
            lines.append("    def _missing_(cls, value):")
            lines.append(f"        return cls.{block.unknown.name}")
        lines.append("")
        lines.append("")
        lines.extend(doc_lines(block.count.doc, "#"))
        lines.append(f"{block.count.name} = {block.count.value}")

    if len(aliases):
        lines.append("")
        lines.append("# External names expected by the serialization layer")
        for entry in aliases:
            external = check_external_name(entry, PYTHON_RESERVED_KEYWORDS, "Python")
            lines.append(f"{external} = {sanitize_identifier(entry.type_name, PYTHON_RESERVED_KEYWORDS)}")

    return "\n".join(lines) + "\n"
