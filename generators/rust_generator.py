"""
Rust generator for an Emission.
Outputs a #[repr(uN)] enum per domain with a decoder impl (From<uN> when the unknown sentinel is on,
TryFrom<uN> otherwise), a count constant, and `pub type` aliases for the external names.
"""
from generators.alias_resolver import AliasTable
from generators.emission_engine import DomainBlock, Emission
from generators.generator_utils import (
    RUST_RESERVED_KEYWORDS,
    banner_lines,
    check_external_name,
    doc_lines,
    sanitize_identifier,
    unsigned_bits_for_width,
)


def rust_repr(block: DomainBlock) -> str:
    return f"u{unsigned_bits_for_width(block.bits)}"


def _emit_decoder(block: DomainBlock, type_name: str, repr_type: str, lines: list):
    variants = [(c.value, sanitize_identifier(c.variant, RUST_RESERVED_KEYWORDS)) for c in block.constants]
    if block.unknown is not None:
        unknown_variant = sanitize_identifier(block.unknown.variant, RUST_RESERVED_KEYWORDS)
        lines.append(f"impl From<{repr_type}> for {type_name} {{")
        lines.append(f"    fn from(value: {repr_type}) -> Self {{")
        lines.append("        match value {")
        for value, variant in variants:
            lines.append(f"            {value} => Self::{variant},")
        lines.append(f"            _ => Self::{unknown_variant},")
        lines.append("        }")
        lines.append("    }")
        lines.append("}")
    else:
        lines.append(f"impl TryFrom<{repr_type}> for {type_name} {{")
        lines.append(f"    type Error = {repr_type};")
        lines.append(f"    fn try_from(value: {repr_type}) -> Result<Self, Self::Error> {{")
        lines.append("        match value {")
        for value, variant in variants:
            lines.append(f"            {value} => Ok(Self::{variant}),")
        lines.append("            _ => Err(value),")
        lines.append("        }")
        lines.append("    }")
        lines.append("}")


def generate_rust_code(emission: Emission, aliases: AliasTable) -> str:
    lines = banner_lines(emission.source_file, "//")
    lines.append("")

    for block in emission:
        type_name = sanitize_identifier(block.type_name, RUST_RESERVED_KEYWORDS)
        repr_type = rust_repr(block)
        lines.extend(doc_lines(block.doc, "///"))
        lines.append("#[derive(Clone, Copy, Debug, PartialEq, Eq, Hash)]")
        lines.append(f"#[repr({repr_type})]")
        lines.append(f"pub enum {type_name} {{")
        for const in block.constants:
            lines.extend(doc_lines(const.doc, "///", indent="    "))
            lines.append(f"    {sanitize_identifier(const.variant, RUST_RESERVED_KEYWORDS)} = {const.value},")
        if block.unknown is not None:
            lines.extend(doc_lines(block.unknown.doc, "///", indent="    "))
            lines.append(
                f"    {sanitize_identifier(block.unknown.variant, RUST_RESERVED_KEYWORDS)} = {block.unknown.value},"
            )
        lines.append("}")
        lines.append("")
        lines.extend(doc_lines(block.count.doc, "///"))
        lines.append(f"pub const {block.count.name}: usize = {block.count.value};")
        lines.append("")
        _emit_decoder(block, type_name, repr_type, lines)
        lines.append("")

    if len(aliases):
        lines.append("// External names expected by the serialization layer")
        for entry in aliases:
            external = check_external_name(entry, RUST_RESERVED_KEYWORDS, "Rust")
            lines.append("#[allow(non_camel_case_types)]")
            lines.append(f"pub type {external} = {sanitize_identifier(entry.type_name, RUST_RESERVED_KEYWORDS)};")

    while lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines) + "\n"
