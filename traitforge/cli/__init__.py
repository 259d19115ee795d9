"""Command line interface for traitforge."""

from .app import app

__all__ = ["app"]
