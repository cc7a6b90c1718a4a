"""
Transform: Converts a fully-transformed EarlyTopology into a validated, immutable TopologyModel.
"""
import sys
from typing import Optional

from early_model import EarlyTopology, EarlyGroup
from early_transform_pipeline import default_early_transforms, run_early_transform_pipeline
from model import DEFAULT_BIT_WIDTH, Domain, Member, TopologyModel
from topo_file_loader import load_topo_file
from topology_errors import MalformedTopologyError


class EarlyModelToModel:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}", file=sys.stderr)

    def process(self, early_model: EarlyTopology) -> TopologyModel:
        """
        Convert an EarlyTopology whose groups are flattened and whose encodings are assigned.
        Any invariant violation surfaces as MalformedTopologyError from the model constructors.
        """
        domains = []
        for item in early_model.items:
            if isinstance(item, EarlyGroup):
                raise MalformedTopologyError(
                    f"Group '{item.name}' was not flattened before model conversion",
                    file=item.file, line=item.line,
                )
            members = []
            for early_member in item.members:
                if early_member.value is None:
                    raise MalformedTopologyError(
                        f"Member '{early_member.name}' has no encoding assigned",
                        domain=item.name, member=early_member.name, file=early_member.file, line=early_member.line,
                    )
                members.append(Member(early_member.name, early_member.value, doc=early_member.doc,
                                      line=early_member.line))
            domain = Domain(
                name=item.name,
                members=members,
                bits=item.bits if item.bits is not None else DEFAULT_BIT_WIDTH,
                base=item.base if item.base is not None else 0,
                reserved=sorted(set(item.reserved)),
                unknown=item.unknown,
                alias=item.alias,
                category=item.category,
                doc=item.doc,
                file=item.file,
                line=item.line,
            )
            self.debug_print(
                f"Domain '{domain.qualified_name}': {len(domain.members)} members, bits={domain.bits}, base={domain.base}"
            )
            domains.append(domain)
        return TopologyModel(early_model.file, domains)


def build_topology_model(early_model: EarlyTopology, verbose: bool = False) -> TopologyModel:
    """Run the default early transforms on an EarlyTopology and convert it to a TopologyModel."""
    early_model = run_early_transform_pipeline(early_model, default_early_transforms(), verbose=verbose)
    return EarlyModelToModel(verbose=verbose).process(early_model)


def load_topology_model(path: str, verbose: bool = False, display_name: Optional[str] = None) -> TopologyModel:
    early_model = load_topo_file(path)
    if display_name is not None:
        early_model.file = display_name
    return build_topology_model(early_model, verbose=verbose)
