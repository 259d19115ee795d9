"""Constraint rules: incompatibility exclusion and required-trait propagation."""

from .tables import RuleSet, build_rules, split_trait_key

__all__ = [
    "RuleSet",
    "build_rules",
    "split_trait_key",
]
