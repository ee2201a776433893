from storefront.sequencing.reorder import assign_sequences, build_payload, move_item
from storefront.sequencing.session import ReorderOutcome, ReorderSession
from storefront.sequencing.client import ReorderClient

__all__ = [
    "assign_sequences",
    "build_payload",
    "move_item",
    "ReorderOutcome",
    "ReorderSession",
    "ReorderClient",
]
