"""
C header generator for an Emission.
Outputs one typedef'd enum per domain (member constants, optional unknown sentinel, trailing count)
followed by typedefs for the external alias names.
"""
from generators.alias_resolver import AliasTable
from generators.emission_engine import Emission
from generators.generator_utils import (
    C_RESERVED_KEYWORDS,
    banner_lines,
    check_external_name,
    doc_lines,
    sanitize_identifier,
)
from symbol_namer import Casing, format_identifier


def include_guard_for(output_name: str) -> str:
    return format_identifier((output_name,), Casing.UPPER_SNAKE) + "_H_"


def generate_c_header(emission: Emission, aliases: AliasTable, output_name: str = "topology") -> str:
    guard = include_guard_for(output_name)
    lines = banner_lines(emission.source_file, "//")
    lines += [
        "",
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
        "#include <stdint.h>",
        "",
    ]

    for block in emission:
        type_name = sanitize_identifier(block.type_name, C_RESERVED_KEYWORDS)
        if block.doc:
            lines.append("/**")
            lines.extend(doc_lines(block.doc, " *"))
            lines.append(" */")
        lines.append(f"typedef enum {sanitize_identifier(block.short_name, C_RESERVED_KEYWORDS)} {{")
        for const in block.constants:
            lines.extend(doc_lines(const.doc, "//", indent="  "))
            lines.append(f"  {const.name} = {const.value},")
        if block.unknown is not None:
            lines.extend(doc_lines(block.unknown.doc, "//", indent="  "))
            lines.append(f"  {block.unknown.name} = {block.unknown.value},")
        lines.extend(doc_lines(block.count.doc, "//", indent="  "))
        lines.append(f"  {block.count.name} = {block.count.value},")
        lines.append(f"}} {type_name};")
        lines.append("")

    if len(aliases):
        lines.append("// External names expected by the serialization layer")
        for entry in aliases:
            external = check_external_name(entry, C_RESERVED_KEYWORDS, "C")
            lines.append(f"typedef {sanitize_identifier(entry.type_name, C_RESERVED_KEYWORDS)} {external};")
        lines.append("")

    lines.append(f"#endif  // {guard}")
    return "\n".join(lines) + "\n"
