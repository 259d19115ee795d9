"""Core models and errors shared across traitforge."""
