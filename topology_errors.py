"""
topology_errors.py
Error types raised while loading, validating, naming and aliasing a topology.
All of them are raised before any output is rendered or written.
"""
from typing import Optional


class TopologyError(ValueError):
    pass


class MalformedTopologyError(TopologyError):
    """
    Bad input structure: empty domains, out-of-range or duplicate encodings,
    duplicate names, syntax errors in the topology file.
    """
    def __init__(self, message: str, domain: Optional[str] = None, member: Optional[str] = None,
                 file: Optional[str] = None, line: Optional[int] = None):
        self.domain = domain
        self.member = member
        self.file = file
        self.line = line
        location = ""
        if file:
            location = f"{file}:{line}: " if line is not None and line > 0 else f"{file}: "
        super().__init__(f"{location}{message}")


class NameCollisionError(TopologyError):
    """Two distinct symbols normalize to the same generated identifier."""
    def __init__(self, domain: str, first: str, second: str, identifier: str):
        self.domain = domain
        self.first = first
        self.second = second
        self.identifier = identifier
        super().__init__(
            f"Domain '{domain}': '{first}' and '{second}' both normalize to identifier '{identifier}'"
        )


class UnresolvedAliasError(TopologyError):
    def __init__(self, domain: str, message: Optional[str] = None):
        self.domain = domain
        super().__init__(message or f"Domain '{domain}' has no external alias name configured")
