"""
early_transform_pipeline.py
Runs EarlyTopology objects through an ordered list of transforms before they are turned into a TopologyModel.

The default order matters: groups are flattened first so each domain knows its category, then member encodings
are assigned. Validation happens afterwards, in the model, never inside a transform.
"""
import sys
from typing import List, Protocol, Sequence

from early_model import EarlyTopology


class EarlyTransform(Protocol):
    def transform(self, model: EarlyTopology) -> EarlyTopology:
        ...


def run_early_transform_pipeline(
    model: EarlyTopology,
    transforms: Sequence[EarlyTransform],
    verbose: bool = False,
) -> EarlyTopology:
    for transform in transforms:
        model = transform.transform(model)
        if verbose:
            print(f"[DEBUG] {type(transform).__name__}: {len(model.items)} top-level items", file=sys.stderr)
    return model


def default_early_transforms() -> List[EarlyTransform]:
    from early_model_transforms.flatten_groups_transform import FlattenGroupsTransform
    from early_model_transforms.assign_encodings_transform import AssignEncodingsTransform
    return [FlattenGroupsTransform(), AssignEncodingsTransform()]
