"""
Early Transform: AssignEncodingsTransform
Assigns encodings to members declared without one. Counting starts at the domain base and continues from the
last explicit encoding, stepping over reserved encodings and the explicit unknown sentinel, so later stages only ever see concrete values.
"""
from early_model import EarlyTopology, EarlyDomain
from early_transform_pipeline import EarlyTransform

class AssignEncodingsTransform(EarlyTransform):
    def transform(self, model: EarlyTopology) -> EarlyTopology:
        for domain in model.iter_domains():
            self._assign_domain_encodings(domain)
        return model

    def _assign_domain_encodings(self, domain: EarlyDomain):
        reserved = set(domain.reserved)
        if domain.unknown is not None:
            reserved.add(domain.unknown)
        next_value = domain.base if domain.base is not None else 0
        for member in domain.members:
            if member.value is None:
                while next_value in reserved:
                    next_value += 1
                member.value = next_value
            next_value = member.value + 1
