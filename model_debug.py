"""
model_debug.py
Text dump utilities for inspecting TopoWrangler models and emissions during verbose runs.
"""
from typing import List

from early_model import EarlyGroup, EarlyTopology
from model import TopologyModel


def _format_doc(doc: str) -> str:
    if not doc:
        return ""
    first = doc.strip().splitlines()[0]
    return f" doc='{first[:30]}{'...' if len(first) > 30 else ''}'"


def dump_early_topology(early_model: EarlyTopology) -> str:
    lines: List[str] = [f"EarlyTopology (file: {early_model.file})"]

    def add_domain(domain, indent):
        details = [f"bits={domain.bits}", f"base={domain.base}"]
        if domain.reserved:
            details.append(f"reserved={domain.reserved}")
        if domain.unknown is not None:
            details.append(f"unknown={domain.unknown}")
        if domain.alias:
            details.append(f"alias='{domain.alias}'")
        if domain.category:
            details.append(f"category='{domain.category}'")
        lines.append(f"{indent}Domain: {domain.name} ({', '.join(details)}) (line={domain.line}){_format_doc(domain.doc)}")
        for member in domain.members:
            value = "AUTO" if member.value is None else member.value
            lines.append(f"{indent}  Member: {member.name} = {value} (line={member.line}){_format_doc(member.doc)}")

    for item in early_model.items:
        if isinstance(item, EarlyGroup):
            lines.append(f"  Group: {item.name} (line={item.line}){_format_doc(item.doc)}")
            for domain in item.domains:
                add_domain(domain, "    ")
        else:
            add_domain(item, "  ")
    return "\n".join(lines)


def dump_topology(model: TopologyModel) -> str:
    lines: List[str] = [f"TopologyModel (file: {model.file}, domains: {len(model)})"]
    for domain in model:
        details = [f"bits={domain.bits}", f"base={domain.base}"]
        if domain.reserved:
            details.append(f"reserved={list(domain.reserved)}")
        if domain.unknown is not None:
            details.append(f"unknown={domain.unknown}")
        if domain.alias:
            details.append(f"alias='{domain.alias}'")
        lines.append(f"  Domain: {domain.qualified_name} ({', '.join(details)}){_format_doc(domain.doc)}")
        for member in domain.members:
            lines.append(f"    Member: {member.name} = {member.value}{_format_doc(member.doc)}")
    return "\n".join(lines)
