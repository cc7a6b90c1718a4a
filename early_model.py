"""
early_model.py
A raw representation of the parsed topology, capturing information directly from the parser or JSON loader
(file, group, line number, doc comments, optional encodings). This is the raw model before any validation.
"""
from typing import List, Optional, Union


class EarlyMember:
    def __init__(self, name: str, value: Optional[int], file: str, line: int, doc: str = ""):
        self.name = name
        self.value = value  # None until AssignEncodingsTransform runs
        self.file = file
        self.line = line
        self.doc = doc


class EarlyDomain:
    def __init__(self, name: str, members: List[EarlyMember], file: str, line: int,
                 bits: Optional[int] = None, base: Optional[int] = None,
                 reserved: Optional[List[int]] = None, unknown: Optional[int] = None,
                 alias: Optional[str] = None, doc: str = "", category: str = ""):
        self.name = name
        self.members = members
        self.file = file
        self.line = line
        self.bits = bits
        self.base = base
        self.reserved = reserved or []
        self.unknown = unknown
        self.alias = alias
        self.doc = doc
        self.category = category


class EarlyGroup:
    def __init__(self, name: str, domains: List[EarlyDomain], file: str, line: int, doc: str = ""):
        self.name = name
        self.domains = domains
        self.file = file
        self.line = line
        self.doc = doc


class EarlyTopology:
    def __init__(self, file: str, items: List[Union[EarlyDomain, EarlyGroup]]):
        self.file = file
        # Top-level domains and groups, in source order
        self.items = items

    def iter_domains(self):
        for item in self.items:
            if isinstance(item, EarlyGroup):
                for domain in item.domains:
                    yield domain
            else:
                yield item
