"""
Collision Query Collaborators
=============================
The geometry model does not own a physics scene. Shapes that support
collision queries forward them to an object implementing `OverlapQuery`,
filtered by a `LayerMask`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from hedra.model.shapes.polygon import Polygon

MAX_LAYERS = 32


@dataclass(frozen=True)
class LayerMask:
    """
    Bit mask selecting which scene layers a query considers.
    Bit `i` set means layer `i` is included.
    """
    bits: int = 0

    def __post_init__(self) -> None:
        if self.bits < 0 or self.bits >= 1 << MAX_LAYERS:
            raise ValueError(f"Layer mask must fit in {MAX_LAYERS} bits, got {self.bits}")

    def __or__(self, other: LayerMask) -> LayerMask:
        return LayerMask(self.bits | other.bits)

    @classmethod
    def from_layers(cls, *layers: int) -> LayerMask:
        bits = 0
        for layer in layers:
            if not 0 <= layer < MAX_LAYERS:
                raise ValueError(f"Layer index out of range: {layer}")
            bits |= 1 << layer
        return cls(bits)

    @classmethod
    def everything(cls) -> LayerMask:
        return cls((1 << MAX_LAYERS) - 1)

    def contains(self, layer: int) -> bool:
        return 0 <= layer < MAX_LAYERS and bool(self.bits & (1 << layer))


class OverlapQuery(Protocol):
    """Scene service returning handles of colliders overlapping a shape."""

    def query_overlaps(self, shape: Polygon, mask: LayerMask) -> list[Any]: ...
