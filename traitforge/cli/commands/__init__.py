"""CLI commands for traitforge."""

from . import (
    generate,
    validate,
)

__all__ = [
    "generate",
    "validate",
]
