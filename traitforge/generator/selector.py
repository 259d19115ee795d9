"""Trait selection: one weighted draw per layer plus rule enforcement."""

import logging
import random
from typing import Iterable, Mapping, Sequence

from ..core.models import Catalog, PickedTrait, Selection, TraitElement, trait_key
from ..rules import RuleSet


logger = logging.getLogger(__name__)


def weighted_pick(elements: Sequence[TraitElement], rng: random.Random) -> TraitElement:
    """Choose an element with probability proportional to its weight.

    Draws ``r`` uniformly in [0, total) and subtracts weights in layer order
    until ``r`` drops to zero or below. If rounding leaves ``r`` positive after
    the last element, the last element is returned.
    """
    total = sum(e.weight for e in elements)
    r = rng.random() * total
    for element in elements:
        r -= element.weight
        if r <= 0:
            return element
    return elements[-1]


def _draw_layers(
    catalog: Catalog,
    rng: random.Random,
    layer_presence: Mapping[str, float],
) -> Selection:
    selection = Selection()
    order = 0
    for layer in catalog.layers:
        presence = layer_presence.get(layer.id, 1.0)
        if presence < 1.0 and rng.random() >= presence:
            continue
        selection.picks.append(PickedTrait(weighted_pick(layer.elements, rng), order))
        order += 1
    return selection


def _fill_mandatory(selection: Selection, catalog: Catalog, mandatory_layers: Iterable[str]) -> None:
    present = set(selection.layers())
    for name in mandatory_layers:
        if name in present:
            continue
        layer = catalog.get_layer(name)
        if layer is None:
            continue
        selection.picks.append(PickedTrait(layer.heaviest(), selection.next_order()))
        present.add(name)


def _apply_requirements(selection: Selection, catalog: Catalog, rules: RuleSet) -> None:
    overrides = rules.resolve_requirements(selection)
    for layer_name, value in overrides.items():
        element = catalog.get_element(layer_name, value)
        if element is None:
            note = f"missing required target '{trait_key(layer_name, value)}'"
            selection.notes.append(note)
            logger.debug(f"Requirement skipped: {note}")
            continue

        idx = selection.index_of(layer_name)
        if idx >= 0:
            # Keep the original render position of the replaced pick
            selection.picks[idx] = PickedTrait(element, selection.picks[idx].order)
        else:
            selection.picks.append(PickedTrait(element, selection.next_order()))


def select_once(
    catalog: Catalog,
    rules: RuleSet,
    rng: random.Random,
    mandatory_layers: Iterable[str] = (),
    layer_presence: Mapping[str, float] | None = None,
) -> Selection:
    """Build one candidate selection.

    Steps:
        1. Weighted draw for every layer in catalog order. A layer with a
           presence probability below 1 may be left out.
        2. Mandatory layers left out get their highest-weight element.
        3. Required traits are forced in: replaced in place when the layer
           was drawn, appended otherwise. Targets missing from the catalog
           are skipped and noted on the selection.

    Render order is fixed when a pick is first added and never recomputed.

    Args:
        catalog: Loaded trait catalog
        rules: Validated rule tables
        rng: Random source
        mandatory_layers: Layers that must be present
        layer_presence: Optional layer -> probability of being drawn

    Returns:
        The candidate Selection (not yet checked for incompatibility)
    """
    selection = _draw_layers(catalog, rng, layer_presence or {})
    if mandatory_layers:
        _fill_mandatory(selection, catalog, mandatory_layers)
    if rules.requires:
        _apply_requirements(selection, catalog, rules)
    return selection
