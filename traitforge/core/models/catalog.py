"""Catalog and selection models.

TraitElement, Layer and Catalog are immutable once loaded. PickedTrait and
Selection are built fresh for every generation attempt.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..errors import CatalogError, EmptyCatalogError


def trait_key(layer: str, value: str) -> str:
    """Build the canonical ``Layer:Value`` identifier."""
    return f"{layer}:{value}"


class TraitElement(BaseModel):
    """One concrete value inside a layer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Trait identifier, 'Layer:Value'")
    layer: str
    name: str
    weight: int = Field(default=1, ge=1)
    path: Path | None = Field(default=None, description="Source asset")
    index: int = Field(default=0, ge=0, description="Position inside the layer")


class Layer(BaseModel):
    """A named trait category with its elements in listing order."""

    model_config = ConfigDict(frozen=True)

    id: str
    index: int = 0
    elements: tuple[TraitElement, ...] = ()

    @property
    def total_weight(self) -> int:
        return sum(e.weight for e in self.elements)

    def get(self, value: str) -> TraitElement | None:
        for element in self.elements:
            if element.name == value:
                return element
        return None

    def heaviest(self) -> TraitElement:
        """Highest-weight element, first occurrence wins ties."""
        best = self.elements[0]
        for element in self.elements[1:]:
            if element.weight > best.weight:
                best = element
        return best


class Catalog(BaseModel):
    """Ordered collection of non-empty layers."""

    model_config = ConfigDict(frozen=True)

    layers: tuple[Layer, ...]

    def get_layer(self, name: str) -> Layer | None:
        for layer in self.layers:
            if layer.id == name:
                return layer
        return None

    def get_element(self, layer: str, value: str) -> TraitElement | None:
        found = self.get_layer(layer)
        if found is None:
            return None
        return found.get(value)

    @property
    def layer_names(self) -> list[str]:
        return [layer.id for layer in self.layers]

    @property
    def combinations(self) -> int:
        """Upper bound on distinct full selections."""
        total = 1
        for layer in self.layers:
            total *= len(layer.elements)
        return total


def build_catalog(layers: list[Layer]) -> Catalog:
    """Assemble an ordered catalog from already enumerated layers.

    Empty layers are dropped and the remaining ones re-indexed in the order
    given.

    Raises:
        EmptyCatalogError: If no layer has at least one element
        CatalogError: If two layers, or two elements of one layer, share a
            display name
    """
    kept = [layer for layer in layers if layer.elements]
    if not kept:
        raise EmptyCatalogError("No layer contains any trait element.")

    layer_ids: set[str] = set()
    for layer in kept:
        if layer.id in layer_ids:
            raise CatalogError(f"Duplicate layer name '{layer.id}'")
        layer_ids.add(layer.id)

        element_ids: set[str] = set()
        for element in layer.elements:
            if element.id in element_ids:
                raise CatalogError(f"Duplicate trait '{element.id}' in layer '{layer.id}'")
            element_ids.add(element.id)

    return Catalog(
        layers=tuple(
            layer.model_copy(update={"index": i}) for i, layer in enumerate(kept)
        )
    )


@dataclass(frozen=True)
class PickedTrait:
    """A trait element chosen for one selection, with its render order."""

    element: TraitElement
    order: int

    @property
    def layer(self) -> str:
        return self.element.layer

    @property
    def name(self) -> str:
        return self.element.name

    @property
    def id(self) -> str:
        return self.element.id


@dataclass
class Selection:
    """One candidate combination: at most one picked trait per layer.

    ``notes`` collects diagnostics from best-effort steps (e.g. a requirement
    whose target is not in the catalog).
    """

    picks: list[PickedTrait] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def layers(self) -> list[str]:
        return [p.layer for p in self.picks]

    def trait_ids(self) -> list[str]:
        return [p.id for p in self.picks]

    def get(self, layer: str) -> PickedTrait | None:
        for pick in self.picks:
            if pick.layer == layer:
                return pick
        return None

    def index_of(self, layer: str) -> int:
        for i, pick in enumerate(self.picks):
            if pick.layer == layer:
                return i
        return -1

    def ordered(self) -> list[PickedTrait]:
        """Picks sorted by render order (bottom layer first)."""
        return sorted(self.picks, key=lambda p: p.order)

    def next_order(self) -> int:
        if not self.picks:
            return 0
        return max(p.order for p in self.picks) + 1

    def __len__(self) -> int:
        return len(self.picks)
