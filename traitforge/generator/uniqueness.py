"""Fingerprinting and the bounded-retry uniqueness search."""

import logging
from typing import Callable

from ..core.errors import MaxAttemptsExceeded
from ..core.models import Selection
from ..rules import RuleSet


logger = logging.getLogger(__name__)

FINGERPRINT_SEPARATOR = "|"


def fingerprint(selection: Selection) -> str:
    """Canonical uniqueness key for a selection.

    Picks are sorted by layer name, so the result does not depend on the
    order traits were added in.
    """
    return FINGERPRINT_SEPARATOR.join(
        pick.id for pick in sorted(selection.picks, key=lambda p: p.layer)
    )


def find_unique(
    select: Callable[[], Selection],
    rules: RuleSet,
    seen: set[str],
    max_attempts: int,
) -> Selection:
    """Draw selections until one is compatible and has a new fingerprint.

    Every draw counts against ``max_attempts``, whether it was rejected for
    an incompatibility or a duplicate fingerprint. On success the fingerprint
    is added to ``seen`` before returning; on failure ``seen`` is unchanged.

    Args:
        select: Zero-argument callable producing a fresh candidate
        rules: Rule tables used for the incompatibility check
        seen: Fingerprints already accepted in this edition
        max_attempts: Attempt ceiling for this search

    Returns:
        The accepted Selection

    Raises:
        MaxAttemptsExceeded: If the ceiling is reached without success
    """
    incompatible = 0
    duplicates = 0

    for attempt in range(1, max_attempts + 1):
        selection = select()

        if rules.is_incompatible(selection):
            incompatible += 1
            logger.debug(f"Attempt {attempt}: rejected incompatible pairs {rules.conflicts(selection)}")
            continue

        key = fingerprint(selection)
        if key in seen:
            duplicates += 1
            logger.debug(f"Attempt {attempt}: duplicate {key}")
            continue

        seen.add(key)
        return selection

    raise MaxAttemptsExceeded(max_attempts, incompatible=incompatible, duplicates=duplicates)
