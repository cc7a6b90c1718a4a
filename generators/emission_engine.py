"""
Emission engine: walks a TopologyModel and produces ordered, typed DomainBlocks that the renderers turn
into text. Every name check and sentinel computation happens here, before any renderer runs, so a failing
topology never produces partial output.
"""
import sys
from dataclasses import dataclass
from typing import Optional, Tuple

from model import Domain, TopologyModel
from symbol_namer import SymbolNamer
from topology_errors import MalformedTopologyError


@dataclass(frozen=True)
class EmissionConfig:
    # Emit an extra "unknown" constant per domain that decoders map unrecognized values onto
    include_unknown_sentinel: bool = False


@dataclass(frozen=True)
class EmittedConstant:
    name: str
    variant: str
    value: int
    doc: str = ""


@dataclass(frozen=True)
class DomainBlock:
    domain: Domain
    type_name: str
    short_name: str
    constants: Tuple[EmittedConstant, ...]
    count: EmittedConstant
    unknown: Optional[EmittedConstant] = None

    @property
    def bits(self) -> int:
        return self.domain.bits

    @property
    def doc(self) -> str:
        return self.domain.doc


@dataclass(frozen=True)
class Emission:
    source_file: str
    blocks: Tuple[DomainBlock, ...]
    config: EmissionConfig

    def __iter__(self):
        return iter(self.blocks)

    def find_block(self, type_name: str) -> Optional[DomainBlock]:
        for block in self.blocks:
            if block.type_name == type_name:
                return block
        return None


def unknown_sentinel_value(domain: Domain) -> int:
    """
    Encoding used for the unknown sentinel: the domain's explicit `unknown` value, or the first
    non-reserved encoding after the highest member encoding. It never aliases a member.
    """
    if domain.unknown is not None:
        return domain.unknown
    reserved = set(domain.reserved)
    value = max(member.value for member in domain.members) + 1
    while value in reserved:
        value += 1
    if not domain.fits(value):
        raise MalformedTopologyError(
            f"Domain '{domain.qualified_name}': no free encoding for the unknown sentinel in {domain.bits} bits; "
            f"declare one with 'unknown'",
            domain=domain.qualified_name, file=domain.file, line=domain.line,
        )
    return value


class EmissionEngine:
    def __init__(self, namer: Optional[SymbolNamer] = None, config: Optional[EmissionConfig] = None,
                 verbose: bool = False):
        self.namer = namer or SymbolNamer()
        self.config = config or EmissionConfig()
        self.verbose = verbose

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}", file=sys.stderr)

    def emit(self, topology: TopologyModel) -> Emission:
        # Validate all names up front so no block is built for a topology that will fail
        names = self.namer.check_topology(topology)
        blocks = []
        for domain in topology:
            member_names = names[domain.qualified_name]
            constants = tuple(
                EmittedConstant(
                    name=member_names[member.name].value_name,
                    variant=self.namer.variant_name(member),
                    value=member.value,
                    doc=member.doc,
                )
                for member in domain.members
            )
            unknown = None
            if self.config.include_unknown_sentinel:
                unknown = EmittedConstant(
                    name=self.namer.unknown_name(domain),
                    variant=self.namer.unknown_variant_name(),
                    value=unknown_sentinel_value(domain),
                    doc="Any encoding not listed above",
                )
            count = EmittedConstant(
                name=self.namer.count_name(domain),
                variant="",
                value=len(domain.members),
                doc=f"Number of {domain.qualified_name} members",
            )
            block = DomainBlock(
                domain=domain,
                type_name=self.namer.type_name(domain),
                short_name=self.namer.name(domain).short_name,
                constants=constants,
                count=count,
                unknown=unknown,
            )
            self.debug_print(
                f"Emitted {block.type_name}: {len(constants)} constants, count={count.value}, "
                f"unknown={unknown.value if unknown else None}"
            )
            blocks.append(block)
        return Emission(topology.file, tuple(blocks), self.config)
