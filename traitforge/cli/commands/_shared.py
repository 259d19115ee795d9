"""Loading shared by the generate and validate commands."""

from pathlib import Path

from ...catalog import load_catalog
from ...core.models import Catalog, EditionConfig
from ...rules import RuleSet, build_rules


def load_inputs(
    config_path: Path,
    overrides: dict | None = None,
) -> tuple[EditionConfig, Catalog, RuleSet, list[str]]:
    """Load config, catalog and rules in that order.

    Raises:
        TraitForgeError: On any configuration, catalog or rule problem
    """
    config = EditionConfig.from_yaml(config_path)
    if overrides:
        config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    catalog = load_catalog(config.traits_dir, config.rarity_delimiter)
    rules, warnings = build_rules(
        config.incompatible,
        config.requires,
        catalog=catalog,
        strict=config.strict_rules,
    )
    return config, catalog, rules, warnings
