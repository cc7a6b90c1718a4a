"""
Shared utilities for the renderers (C, Rust, Python 3, JSON).
Handles the generated-file banner, doc comments, reserved keywords and integer widths.
"""
import keyword
from typing import Iterable, List, Optional

from generators.alias_resolver import AliasEntry
from topology_errors import UnresolvedAliasError

GENERATED_BANNER = "Generated by TopoWrangler from {source}. DO NOT EDIT."

C_RESERVED_KEYWORDS = {
    "auto", "break", "case", "char", "const", "continue", "default", "do", "double", "else", "enum",
    "extern", "float", "for", "goto", "if", "inline", "int", "long", "register", "restrict", "return",
    "short", "signed", "sizeof", "static", "struct", "switch", "typedef", "union", "unsigned", "void",
    "volatile", "while", "bool", "true", "false", "alignas", "alignof", "nullptr", "static_assert",
    "thread_local", "typeof", "constexpr",
}

RUST_RESERVED_KEYWORDS = {
    "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod", "move", "mut", "pub", "ref",
    "return", "self", "Self", "static", "struct", "super", "trait", "true", "type", "unsafe", "use",
    "where", "while", "abstract", "become", "box", "do", "final", "macro", "override", "priv", "try",
    "typeof", "unsized", "virtual", "yield",
}

PYTHON_RESERVED_KEYWORDS = set(keyword.kwlist)


def banner_lines(source_file: Optional[str], comment_prefix: str) -> List[str]:
    return [f"{comment_prefix} " + GENERATED_BANNER.format(source=source_file or "<unknown>")]


def doc_lines(doc: Optional[str], prefix: str, indent: str = "") -> List[str]:
    """One comment line per doc line; empty docs produce no lines."""
    if not doc:
        return []
    return [f"{indent}{prefix} {line}".rstrip() for line in doc.strip().splitlines()]


def sanitize_identifier(name: str, reserved: Iterable[str]) -> str:
    if name[:1].isdigit():
        name = "_" + name
    if name in reserved:
        name += "_"
    return name


def check_external_name(entry: AliasEntry, reserved: Iterable[str], target: str) -> str:
    """External names are mandated verbatim, so a reserved word cannot be renamed and must fail instead."""
    if entry.external_name in reserved:
        raise UnresolvedAliasError(
            entry.domain,
            f"Domain '{entry.domain}': external name '{entry.external_name}' is a reserved word in {target}",
        )
    return entry.external_name


def unsigned_bits_for_width(bits: int) -> int:
    for width in (8, 16, 32, 64):
        if bits <= width:
            return width
    raise ValueError(f"Bit width {bits} does not fit in 64 bits")
