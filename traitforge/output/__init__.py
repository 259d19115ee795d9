"""I/O collaborators around the generation engine."""

from .compositor import PillowCompositor
from .preview import build_preview
from .writer import DirectoryWriter

__all__ = [
    "PillowCompositor",
    "DirectoryWriter",
    "build_preview",
]
