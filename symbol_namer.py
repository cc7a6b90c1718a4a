"""
symbol_namer.py
Derives canonical identifiers for domains and members.

All casing goes through format_identifier(), keyed by the Casing enumeration, so every generator spells a
given (domain, member) pair the same way. The namer holds configuration only: calling it twice with the same
inputs always produces the same names, which keeps generated output stable across regenerations.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from model import Domain, Member, TopologyModel
from topology_errors import MalformedTopologyError, NameCollisionError

# One word per match: an acronym before a capitalized word ("HTTPServer" -> HTTP, Server), a capitalized or
# lowercase run ("UsbDp" -> Usb, Dp) or an all-caps run ("GPIO0"). Digits stay attached to their word.
WORD_RE = re.compile(r'[A-Z][A-Z0-9]*(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z0-9]+')

COUNT_SUFFIX = "count"
UNKNOWN_SUFFIX = "unknown"


class Casing(Enum):
    SNAKE = "snake_case"
    UPPER_SNAKE = "UPPER_SNAKE_CASE"
    UPPER_CAMEL = "UpperCamelCase"
    LOWER_CAMEL = "lowerCamelCase"


def split_words(parts: Iterable[Optional[str]]) -> List[str]:
    """Split name parts into words. Separators of any kind and repeats of them are dropped."""
    words = []
    for part in parts:
        if part:
            words.extend(WORD_RE.findall(part))
    return words


def format_identifier(parts: Iterable[Optional[str]], casing: Casing) -> str:
    words = split_words(parts)
    if casing == Casing.SNAKE:
        return "_".join(w.lower() for w in words)
    if casing == Casing.UPPER_SNAKE:
        return "_".join(w.upper() for w in words)
    if casing == Casing.UPPER_CAMEL:
        return "".join(w[:1].upper() + w[1:].lower() for w in words)
    if casing == Casing.LOWER_CAMEL:
        camel = "".join(w[:1].upper() + w[1:].lower() for w in words)
        return camel[:1].lower() + camel[1:]
    raise ValueError(f"Unsupported casing: {casing!r}")


@dataclass(frozen=True)
class CanonicalName:
    short_name: str
    type_name: str
    value_name: str


class SymbolNamer:
    def __init__(self, prefix: str = "", type_suffix: str = "Type"):
        """
        Args:
            prefix: Extra leading word(s) applied to every type and value name (e.g. a top-level name)
            type_suffix: Appended to the UpperCamel domain name to form the enumeration type name
        """
        self.prefix = prefix
        self.type_suffix = type_suffix

    def _domain_parts(self, domain: Domain) -> Tuple[str, str, str]:
        return (self.prefix, domain.category, domain.name)

    def identifier(self, domain: Domain, member: Optional[Member], casing: Casing) -> str:
        parts = self._domain_parts(domain)
        if member is not None:
            parts = parts + (member.name,)
        return format_identifier(parts, casing)

    def type_name(self, domain: Domain) -> str:
        return format_identifier(self._domain_parts(domain), Casing.UPPER_CAMEL) + self.type_suffix

    def name(self, domain: Domain, member: Optional[Member] = None) -> CanonicalName:
        if member is None:
            short_name = format_identifier((domain.category, domain.name), Casing.SNAKE)
        else:
            short_name = format_identifier((member.name,), Casing.SNAKE)
        if not short_name:
            owner = f"member '{member.name}'" if member is not None else f"domain '{domain.name}'"
            raise MalformedTopologyError(
                f"{owner} contains no identifier characters",
                domain=domain.qualified_name, member=member.name if member is not None else None,
                file=domain.file, line=member.line if member is not None else domain.line,
            )
        return CanonicalName(
            short_name=short_name,
            type_name=self.type_name(domain),
            value_name=self.identifier(domain, member, Casing.UPPER_SNAKE),
        )

    def variant_name(self, member: Member) -> str:
        """Member name alone, for targets with scoped enumerators (Rust variants)."""
        return format_identifier((member.name,), Casing.UPPER_CAMEL)

    def count_name(self, domain: Domain) -> str:
        return format_identifier(self._domain_parts(domain) + (COUNT_SUFFIX,), Casing.UPPER_SNAKE)

    def unknown_name(self, domain: Domain) -> str:
        return format_identifier(self._domain_parts(domain) + (UNKNOWN_SUFFIX,), Casing.UPPER_SNAKE)

    def unknown_variant_name(self) -> str:
        return format_identifier((UNKNOWN_SUFFIX,), Casing.UPPER_CAMEL)

    def check_domain(self, domain: Domain) -> Dict[str, CanonicalName]:
        """
        Name every member of a domain and fail eagerly with NameCollisionError if two members normalize to
        the same value name or variant name, or if a member would shadow the synthetic count/unknown constants.
        Returns the canonical names keyed by member name, in member order.
        """
        synthetic = {
            self.count_name(domain): "<count>",
            self.unknown_name(domain): "<unknown>",
        }
        synthetic_variants = {self.unknown_variant_name(): "<unknown>"}
        value_names: Dict[str, str] = {}
        variant_names: Dict[str, str] = {}
        names: Dict[str, CanonicalName] = {}
        for member in domain.members:
            canonical = self.name(domain, member)
            variant = self.variant_name(member)
            if canonical.value_name in synthetic:
                raise NameCollisionError(
                    domain.qualified_name, member.name, synthetic[canonical.value_name], canonical.value_name
                )
            if variant in synthetic_variants:
                raise NameCollisionError(domain.qualified_name, member.name, synthetic_variants[variant], variant)
            if canonical.value_name in value_names:
                raise NameCollisionError(
                    domain.qualified_name, value_names[canonical.value_name], member.name, canonical.value_name
                )
            if variant in variant_names:
                raise NameCollisionError(domain.qualified_name, variant_names[variant], member.name, variant)
            value_names[canonical.value_name] = member.name
            variant_names[variant] = member.name
            names[member.name] = canonical
        return names

    def check_topology(self, topology: TopologyModel) -> Dict[str, Dict[str, CanonicalName]]:
        """
        Run check_domain over every domain, then check that type names and value names stay unique across
        domains too, since generated constants share one namespace in C.
        """
        all_names = {}
        type_owners: Dict[str, str] = {}
        value_owners: Dict[str, str] = {}
        for domain in topology:
            names = self.check_domain(domain)
            type_name = self.type_name(domain)
            if type_name in type_owners:
                raise NameCollisionError(domain.qualified_name, type_owners[type_name], domain.qualified_name, type_name)
            type_owners[type_name] = domain.qualified_name
            identifiers = [(member.name, names[member.name].value_name) for member in domain.members]
            identifiers.append(("<count>", self.count_name(domain)))
            identifiers.append(("<unknown>", self.unknown_name(domain)))
            for owner, identifier in identifiers:
                qualified_owner = f"{domain.qualified_name}.{owner}"
                if identifier in value_owners:
                    raise NameCollisionError(domain.qualified_name, value_owners[identifier], qualified_owner, identifier)
                value_owners[identifier] = qualified_owner
            all_names[domain.qualified_name] = names
        return all_names
