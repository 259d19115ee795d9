"""Data models for traitforge.

This package contains the models used across the system:
- catalog.py: Trait elements, layers, the catalog and per-attempt selections
- config.py: Edition configuration loaded from YAML
- metadata.py: Token metadata records and accepted tokens
"""

from .catalog import (
    TraitElement,
    Layer,
    Catalog,
    PickedTrait,
    Selection,
    build_catalog,
    trait_key,
)
from .config import EditionConfig, PreviewConfig
from .metadata import (
    TraitAttribute,
    TokenMetadata,
    Token,
    build_metadata,
    image_uri,
    render_name,
)

__all__ = [
    # Catalog
    "TraitElement",
    "Layer",
    "Catalog",
    "PickedTrait",
    "Selection",
    "build_catalog",
    "trait_key",
    # Config
    "EditionConfig",
    "PreviewConfig",
    # Metadata
    "TraitAttribute",
    "TokenMetadata",
    "Token",
    "build_metadata",
    "image_uri",
    "render_name",
]
