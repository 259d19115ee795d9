"""Tests for rule table validation and lookups."""

import pytest

from traitforge.core.errors import RuleConfigError
from traitforge.core.models import PickedTrait, Selection
from traitforge.rules import build_rules, split_trait_key


def _selection(catalog, *ids):
    picks = []
    for order, trait_id in enumerate(ids):
        layer, value = trait_id.split(":")
        picks.append(PickedTrait(catalog.get_element(layer, value), order))
    return Selection(picks=picks)


class TestBuildRules:
    """Tests for load-time validation."""

    @pytest.mark.parametrize("key", ["Base", "Base:", ":Alien", "A:b:c"])
    def test_malformed_key(self, key):
        with pytest.raises(RuleConfigError):
            split_trait_key(key)
        with pytest.raises(RuleConfigError):
            build_rules(incompatible={key: ["Eye:Laser"]})

    def test_malformed_target(self):
        with pytest.raises(RuleConfigError):
            build_rules(requires={"Eye:Laser": ["Fangs"]})

    def test_unknown_reference_strict(self, sample_catalog):
        with pytest.raises(RuleConfigError, match="unknown layer 'Head'"):
            build_rules(incompatible={"Base:Alien": ["Head:Crown"]}, catalog=sample_catalog)

        with pytest.raises(RuleConfigError, match="unknown value 'Gold'"):
            build_rules(requires={"Eye:Laser": ["Mouth:Gold"]}, catalog=sample_catalog)

    def test_unknown_reference_lenient(self, sample_catalog):
        rules, warnings = build_rules(
            incompatible={"Base:Alien": ["Head:Crown"]},
            requires={"Eye:Laser": ["Mouth:Gold"]},
            catalog=sample_catalog,
            strict=False,
        )

        assert len(warnings) == 2
        assert "Head:Crown" in rules.incompatible["Base:Alien"]
        assert rules.requires["Eye:Laser"] == (("Mouth", "Gold"),)

    def test_without_catalog_only_format_checked(self):
        rules, warnings = build_rules(requires={"Eye:Laser": ["Mouth:Anything"]})
        assert not warnings
        assert rules


class TestIncompatibility:
    """Tests for incompatibility checks."""

    def test_declared_direction(self, sample_catalog):
        rules, _ = build_rules(incompatible={"Base:Alien": ["Eye:Laser"]}, catalog=sample_catalog)

        assert rules.is_incompatible(_selection(sample_catalog, "Base:Alien", "Eye:Laser"))
        assert rules.is_incompatible(_selection(sample_catalog, "Eye:Laser", "Base:Alien"))
        assert not rules.is_incompatible(_selection(sample_catalog, "Base:Alien", "Eye:Normal"))

    def test_conflicts_listed(self, sample_catalog):
        rules, _ = build_rules(incompatible={"Base:Alien": ["Eye:Laser"]}, catalog=sample_catalog)
        selection = _selection(sample_catalog, "Base:Alien", "Eye:Laser")

        assert rules.conflicts(selection) == [("Base:Alien", "Eye:Laser")]

    def test_table_not_symmetrized(self, sample_catalog):
        rules, _ = build_rules(
            incompatible={"Eye:Laser": ["Mouth:Smile"]},
            catalog=sample_catalog,
        )

        assert rules.is_incompatible(_selection(sample_catalog, "Mouth:Smile", "Eye:Laser"))
        assert "Mouth:Smile" not in rules.incompatible


class TestRequirements:
    """Tests for requirement resolution."""

    def test_resolves_targets(self, sample_catalog):
        rules, _ = build_rules(requires={"Eye:Laser": ["Mouth:Fangs"]}, catalog=sample_catalog)
        selection = _selection(sample_catalog, "Eye:Laser", "Mouth:Smile")

        assert rules.resolve_requirements(selection) == {"Mouth": "Fangs"}

    def test_last_write_wins_in_selection_order(self, sample_catalog):
        rules, _ = build_rules(
            requires={
                "Base:Alien": ["Mouth:Flat"],
                "Eye:Laser": ["Mouth:Fangs"],
            },
            catalog=sample_catalog,
        )

        forward = _selection(sample_catalog, "Base:Alien", "Eye:Laser")
        backward = _selection(sample_catalog, "Eye:Laser", "Base:Alien")

        assert rules.resolve_requirements(forward) == {"Mouth": "Fangs"}
        assert rules.resolve_requirements(backward) == {"Mouth": "Flat"}

    def test_no_requirements(self, sample_catalog):
        rules, _ = build_rules()
        assert rules.resolve_requirements(_selection(sample_catalog, "Base:Alien")) == {}
        assert not rules
