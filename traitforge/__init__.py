"""traitforge: layered generative edition builder."""

__version__ = "0.1.0"
