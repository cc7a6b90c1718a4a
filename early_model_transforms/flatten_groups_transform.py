"""
FlattenGroupsTransform: Replaces every `group` block with its domains, recording the group name as the
domain category so the namer can prefix identifiers with it. Source order is preserved.
"""
from early_model import EarlyTopology, EarlyGroup
from early_transform_pipeline import EarlyTransform

class FlattenGroupsTransform(EarlyTransform):
    def transform(self, model: EarlyTopology) -> EarlyTopology:
        flat = []
        for item in model.items:
            if isinstance(item, EarlyGroup):
                for domain in item.domains:
                    domain.category = item.name
                    flat.append(domain)
            else:
                flat.append(item)
        model.items = flat
        return model
