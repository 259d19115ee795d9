"""Layer catalog: discovers trait layers and their weighted elements."""

from .loader import (
    DEFAULT_EXTENSIONS,
    load_catalog,
    natural_key,
    parse_weight,
    read_layer,
    to_title,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "load_catalog",
    "natural_key",
    "parse_weight",
    "read_layer",
    "to_title",
]
