"""Generation engine for traitforge.

Pipeline:
    Step 1: select_once() - Weighted draw per layer, mandatory layers, requirements
    Step 2: find_unique() - Retry until compatible and unseen, under a budget
    Step 3: generate_edition() - Drive steps 1-2 over every edition number,
            emit tokens, optionally shuffle the metadata assignment
"""

from .selector import select_once, weighted_pick
from .uniqueness import find_unique, fingerprint
from .edition import (
    Compositor,
    EditionResult,
    EditionWriter,
    generate_edition,
    shuffle_metadata,
)

__all__ = [
    "select_once",
    "weighted_pick",
    "find_unique",
    "fingerprint",
    "Compositor",
    "EditionResult",
    "EditionWriter",
    "generate_edition",
    "shuffle_metadata",
]
