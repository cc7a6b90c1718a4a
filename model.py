"""
model.py
Concrete, generator-ready representation of a topology. Every member has a concrete encoding and every
invariant has been checked: constructing a Domain or TopologyModel that breaks one raises MalformedTopologyError.
Instances are immutable; generators only ever read them.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from topology_errors import MalformedTopologyError

MAX_BIT_WIDTH = 64
DEFAULT_BIT_WIDTH = 32


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Member:
    name: str
    value: int
    doc: str = ""
    line: int = 0


@dataclass(frozen=True)
class Domain:
    name: str
    members: Tuple[Member, ...]
    bits: int = DEFAULT_BIT_WIDTH
    base: int = 0
    reserved: Tuple[int, ...] = ()
    unknown: Optional[int] = None
    alias: Optional[str] = None
    category: str = ""
    doc: str = ""
    file: Optional[str] = None
    line: int = 0

    def __post_init__(self):
        # Normalize list arguments to tuples
        object.__setattr__(self, 'members', tuple(self.members))
        object.__setattr__(self, 'reserved', tuple(self.reserved))
        self._validate()

    @property
    def qualified_name(self) -> str:
        return f"{self.category}_{self.name}" if self.category else self.name

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    def fits(self, value: int) -> bool:
        return 0 <= value <= self.max_value

    def _error(self, message: str, member: Optional[Member] = None) -> MalformedTopologyError:
        line = member.line if member is not None and member.line else self.line
        return MalformedTopologyError(
            f"Domain '{self.qualified_name}': {message}",
            domain=self.qualified_name,
            member=member.name if member is not None else None,
            file=self.file,
            line=line,
        )

    def _validate(self):
        if not self.name:
            raise self._error("domain name must not be empty")
        for label, value in (("bit width", self.bits), ("base", self.base)):
            if not _is_int(value):
                raise self._error(f"{label} {value!r} is not an integer")
        for value in self.reserved:
            if not _is_int(value):
                raise self._error(f"reserved encoding {value!r} is not an integer")
        if self.unknown is not None and not _is_int(self.unknown):
            raise self._error(f"unknown sentinel {self.unknown!r} is not an integer")
        if not 1 <= self.bits <= MAX_BIT_WIDTH:
            raise self._error(f"bit width {self.bits} is outside 1..{MAX_BIT_WIDTH}")
        if not self.fits(self.base):
            raise self._error(f"base {self.base} does not fit in {self.bits} bits")
        for value in self.reserved:
            if not self.fits(value):
                raise self._error(f"reserved encoding {value} does not fit in {self.bits} bits")
        if not self.members:
            raise self._error("domain has no members")

        reserved = set(self.reserved)
        names = {}
        values = {}
        for member in self.members:
            if not member.name:
                raise self._error("member name must not be empty", member)
            if not _is_int(member.value):
                raise self._error(f"member '{member.name}' encoding {member.value!r} is not an integer", member)
            folded = member.name.lower()
            if folded in names:
                raise self._error(
                    f"duplicate member name '{member.name}' (already declared as '{names[folded].name}')", member
                )
            names[folded] = member
            if not self.fits(member.value):
                raise self._error(
                    f"member '{member.name}' encoding {member.value} does not fit in {self.bits} bits", member
                )
            if member.value in reserved:
                raise self._error(f"member '{member.name}' uses reserved encoding {member.value}", member)
            if member.value in values:
                raise self._error(
                    f"members '{values[member.value].name}' and '{member.name}' share encoding {member.value}", member
                )
            values[member.value] = member

        if self.unknown is not None:
            if not self.fits(self.unknown):
                raise self._error(f"unknown sentinel {self.unknown} does not fit in {self.bits} bits")
            if self.unknown in values:
                raise self._error(
                    f"unknown sentinel {self.unknown} collides with member '{values[self.unknown].name}'"
                )

        expected = self._expected_encodings(len(self.members))
        if sorted(values) != expected:
            missing = sorted(set(expected) - set(values))
            raise self._error(
                f"member encodings are not contiguous from base {self.base}; missing {missing}"
            )

    def _expected_encodings(self, count: int) -> List[int]:
        # An explicit unknown sentinel holds a slot just like a reserved encoding
        reserved = set(self.reserved)
        if self.unknown is not None:
            reserved.add(self.unknown)
        expected = []
        value = self.base
        while len(expected) < count:
            if value not in reserved:
                expected.append(value)
            value += 1
        return expected


@dataclass(frozen=True)
class TopologyModel:
    file: str
    domains: Tuple[Domain, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'domains', tuple(self.domains))
        seen = {}
        for domain in self.domains:
            key = domain.qualified_name.lower()
            if key in seen:
                raise MalformedTopologyError(
                    f"Domain '{domain.qualified_name}' is declared more than once "
                    f"(first declared as '{seen[key].qualified_name}')",
                    domain=domain.qualified_name, file=domain.file or self.file, line=domain.line,
                )
            seen[key] = domain

    def __iter__(self) -> Iterator[Domain]:
        return iter(self.domains)

    def __len__(self) -> int:
        return len(self.domains)

    def find_domain(self, qualified_name: str) -> Optional[Domain]:
        for domain in self.domains:
            if domain.qualified_name == qualified_name:
                return domain
        return None
