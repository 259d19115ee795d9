"""Incompatibility and requirement rule tables.

Rules are keyed by ``Layer:Value`` trait identifiers. Tables are validated
once when built and are read-only afterwards.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from ..core.errors import RuleConfigError
from ..core.models import Catalog, Selection


logger = logging.getLogger(__name__)


def split_trait_key(key: str) -> tuple[str, str]:
    """Split ``Layer:Value`` into its parts.

    Raises:
        RuleConfigError: If the key is not exactly two non-empty parts
    """
    parts = key.split(":")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise RuleConfigError(f"Malformed trait reference '{key}', expected 'Layer:Value'")
    return parts[0], parts[1]


@dataclass(frozen=True)
class RuleSet:
    """Validated rule lookup tables.

    ``incompatible`` maps a trait id to the ids it may not appear with. Only
    the direction declared in the table is checked.
    ``requires`` maps a trait id to the ``Layer:Value`` targets it forces.
    """

    incompatible: Mapping[str, frozenset[str]] = field(default_factory=dict)
    requires: Mapping[str, tuple[tuple[str, str], ...]] = field(default_factory=dict)

    def is_incompatible(self, selection: Selection) -> bool:
        chosen = selection.trait_ids()
        chosen_set = set(chosen)
        for trait_id in chosen:
            forbidden = self.incompatible.get(trait_id)
            if forbidden and not forbidden.isdisjoint(chosen_set):
                return True
        return False

    def conflicts(self, selection: Selection) -> list[tuple[str, str]]:
        """List the (trait, forbidden partner) pairs present in a selection."""
        chosen = selection.trait_ids()
        chosen_set = set(chosen)
        return [
            (trait_id, other)
            for trait_id in chosen
            for other in sorted(self.incompatible.get(trait_id, ()))
            if other in chosen_set
        ]

    def resolve_requirements(self, selection: Selection) -> dict[str, str]:
        """Collect forced values per layer implied by the chosen traits.

        Traits are visited in selection order and a later requirement for the
        same layer overwrites an earlier one.
        """
        overrides: dict[str, str] = {}
        for trait_id in selection.trait_ids():
            for layer, value in self.requires.get(trait_id, ()):
                overrides[layer] = value
        return overrides

    def __bool__(self) -> bool:
        return bool(self.incompatible or self.requires)


def _check_known(
    key: str,
    catalog: Catalog | None,
    strict: bool,
    warnings: list[str],
    context: str,
) -> None:
    if catalog is None:
        return
    layer, value = split_trait_key(key)
    if catalog.get_layer(layer) is None:
        problem = f"{context}: unknown layer '{layer}' in '{key}'"
    elif catalog.get_element(layer, value) is None:
        problem = f"{context}: unknown value '{value}' in layer '{layer}'"
    else:
        return
    if strict:
        raise RuleConfigError(problem)
    warnings.append(problem)


def build_rules(
    incompatible: Mapping[str, Sequence[str]] | None = None,
    requires: Mapping[str, Sequence[str]] | None = None,
    catalog: Catalog | None = None,
    strict: bool = True,
) -> tuple[RuleSet, list[str]]:
    """Validate raw rule tables and build a RuleSet.

    Args:
        incompatible: Trait id -> trait ids it must not appear with
        requires: Trait id -> ``Layer:Value`` targets it forces
        catalog: When given, every reference is checked against it
        strict: Raise on unknown references instead of collecting warnings

    Returns:
        Tuple of (rule set, warnings). Warnings are only produced when
        ``strict`` is off.

    Raises:
        RuleConfigError: On malformed keys, or unknown references when strict
    """
    warnings: list[str] = []

    incompatible_table: dict[str, frozenset[str]] = {}
    for key, targets in (incompatible or {}).items():
        split_trait_key(key)
        _check_known(key, catalog, strict, warnings, "incompatible")
        for target in targets:
            split_trait_key(target)
            _check_known(target, catalog, strict, warnings, f"incompatible[{key}]")
        incompatible_table[key] = frozenset(targets)

    requires_table: dict[str, tuple[tuple[str, str], ...]] = {}
    for key, targets in (requires or {}).items():
        split_trait_key(key)
        _check_known(key, catalog, strict, warnings, "requires")
        resolved = []
        for target in targets:
            resolved.append(split_trait_key(target))
            _check_known(target, catalog, strict, warnings, f"requires[{key}]")
        requires_table[key] = tuple(resolved)

    for warning in warnings:
        logger.warning(f"Unknown rule reference: {warning}")

    return RuleSet(incompatible=incompatible_table, requires=requires_table), warnings
