"""
Alias resolver: gives every emitted domain type exactly one external fixed name, so that a separate
fixed-layout serialization layer can refer to the generated types under the identifiers it expects
(e.g. `pinmux_pad_t` for `PadDirectType`).
"""
import sys
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from generators.emission_engine import DomainBlock, Emission
from symbol_namer import Casing, format_identifier
from topology_errors import NameCollisionError, UnresolvedAliasError


@dataclass(frozen=True)
class AliasEntry:
    type_name: str
    external_name: str
    domain: str


class AliasRules:
    """
    Where external names come from, in order of precedence:
      1. `explicit`: a mapping keyed by the domain's qualified name (category_name) or bare name
      2. the `alias` clause of the domain in the topology file (unless use_topology_aliases is False)
      3. `pattern`: a str.format pattern with the placeholders {domain}, {name}, {category} and {type}
    """

    def __init__(self, explicit: Optional[Dict[str, str]] = None, pattern: Optional[str] = None,
                 use_topology_aliases: bool = True):
        self.explicit = dict(explicit or {})
        self.pattern = pattern
        self.use_topology_aliases = use_topology_aliases

    def external_name_for(self, block: DomainBlock) -> Optional[str]:
        domain = block.domain
        if domain.qualified_name in self.explicit:
            return self.explicit[domain.qualified_name]
        if domain.name in self.explicit:
            return self.explicit[domain.name]
        if self.use_topology_aliases and domain.alias:
            return domain.alias
        if self.pattern:
            try:
                return self.pattern.format(
                    domain=block.short_name,
                    name=format_identifier((domain.name,), Casing.SNAKE),
                    category=format_identifier((domain.category,), Casing.SNAKE),
                    type=block.type_name,
                )
            except (KeyError, IndexError) as e:
                raise UnresolvedAliasError(
                    domain.qualified_name,
                    f"Alias pattern '{self.pattern}' uses an unknown placeholder {e}",
                ) from e
        return None


class AliasTable:
    def __init__(self, entries: Tuple[AliasEntry, ...]):
        self.entries = tuple(entries)

    def __iter__(self) -> Iterator[AliasEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def mapping(self) -> Dict[str, str]:
        """Flat mapping of external fixed name -> internal type name, in domain order."""
        return {entry.external_name: entry.type_name for entry in self.entries}

    def entry_for_domain(self, domain: str) -> Optional[AliasEntry]:
        for entry in self.entries:
            if entry.domain == domain:
                return entry
        return None


class AliasResolver:
    def __init__(self, rules: Optional[AliasRules] = None, verbose: bool = False):
        self.rules = rules or AliasRules()
        self.verbose = verbose

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}", file=sys.stderr)

    def resolve(self, emission: Emission) -> AliasTable:
        internal_types = {block.type_name: block.domain.qualified_name for block in emission}
        owners: Dict[str, str] = {}
        entries = []
        for block in emission:
            domain_name = block.domain.qualified_name
            external = self.rules.external_name_for(block)
            if not external:
                raise UnresolvedAliasError(domain_name)
            if not external.isidentifier():
                raise UnresolvedAliasError(
                    domain_name, f"Domain '{domain_name}': external name '{external}' is not a valid identifier"
                )
            if external in owners:
                raise NameCollisionError(domain_name, owners[external], domain_name, external)
            if external in internal_types:
                raise NameCollisionError(domain_name, internal_types[external], domain_name, external)
            owners[external] = domain_name
            entries.append(AliasEntry(type_name=block.type_name, external_name=external, domain=domain_name))
            self.debug_print(f"Alias {external} -> {block.type_name}")
        return AliasTable(tuple(entries))
