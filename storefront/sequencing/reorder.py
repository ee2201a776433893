from typing import List, TypeVar

from storefront.schemas.product import ProductRead
from storefront.schemas.reorder import SequenceAssignment

T = TypeVar("T")


def move_item(items: List[T], source_index: int, destination_index: int) -> List[T]:
    """Remove o item da posição de origem e reinsere na de destino (splice)."""
    if not 0 <= source_index < len(items):
        raise IndexError(f"source index {source_index} out of range")
    if not 0 <= destination_index < len(items):
        raise IndexError(f"destination index {destination_index} out of range")

    moved = list(items)
    item = moved.pop(source_index)
    moved.insert(destination_index, item)
    return moved


def assign_sequences(items: List[ProductRead]) -> List[ProductRead]:
    # Sequência igual à posição: 0..n-1, sem buracos
    return [item.model_copy(update={"sequence": index}) for index, item in enumerate(items)]


def build_payload(items: List[ProductRead]) -> List[SequenceAssignment]:
    return [SequenceAssignment(id=item.id, sequence=item.sequence) for item in items]
