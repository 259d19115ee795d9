"""Edition orchestration: drives the uniqueness search across all tokens.

Generation is strictly sequential. Token N+1's search only starts once token
N's fingerprint has been added to the shared ``seen`` set.
"""

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol

from ..core.errors import MaxAttemptsExceeded
from ..core.models import (
    Catalog,
    EditionConfig,
    Selection,
    Token,
    TokenMetadata,
    build_metadata,
    render_name,
)
from ..rules import RuleSet
from .selector import select_once
from .uniqueness import find_unique, fingerprint


logger = logging.getLogger(__name__)


class Compositor(Protocol):
    def composite(self, selection: Selection) -> bytes: ...


class EditionWriter(Protocol):
    def write_image(self, edition: int, data: bytes) -> Path: ...

    def persist(self, token_id: int, record: dict[str, Any]) -> None: ...

    def clear_metadata(self) -> None: ...

    def write_collection(self, records: list[dict[str, Any]]) -> None: ...

    def write_fingerprints(self, fingerprints: list[str]) -> None: ...


# Called after each accepted token: (token, edition_size)
ProgressCallback = Callable[[Token, int], None]


@dataclass
class EditionResult:
    """Outcome of one edition run."""

    tokens: list[Token] = field(default_factory=list)
    metadata: list[TokenMetadata] = field(default_factory=list)
    fingerprints: list[str] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    seen: set[str] = field(default_factory=set)
    shuffled: bool = False

    @property
    def shortfall(self) -> int:
        return len(self.skipped)

    @property
    def image_paths(self) -> list[Path]:
        return [t.image_path for t in self.tokens if t.image_path is not None]


def shuffle_metadata(
    metadata: list[TokenMetadata],
    config: EditionConfig,
    rng: random.Random,
) -> list[TokenMetadata]:
    """Randomly reassign display token ids over the generated records.

    Display id ``k`` (1-based) receives the content of the k-th record after a
    uniform permutation, with ``name`` and ``edition`` rewritten to ``k``. The
    image URI keeps pointing at the image the attributes were composed into,
    so image files stay at their original numbers.
    """
    order = list(range(len(metadata)))
    rng.shuffle(order)

    shuffled = []
    for new_id, original_idx in enumerate(order, start=1):
        source = metadata[original_idx]
        shuffled.append(
            source.model_copy(
                update={
                    "name": render_name(config.name_template, config.name_prefix, new_id),
                    "edition": new_id,
                },
                deep=True,
            )
        )
    return shuffled


def generate_edition(
    catalog: Catalog,
    rules: RuleSet,
    config: EditionConfig,
    rng: random.Random | None = None,
    compositor: Compositor | None = None,
    writer: EditionWriter | None = None,
    on_progress: ProgressCallback | None = None,
) -> EditionResult:
    """Generate the whole edition.

    For each edition number a unique selection is searched for. Slots whose
    search runs out of attempts are skipped and never backfilled, leaving a
    gap in the image numbering.

    Args:
        catalog: Loaded trait catalog
        rules: Validated rule tables
        config: Edition configuration
        rng: Random source; seeded from ``config.seed`` when omitted
        compositor: Optional image compositor
        writer: Optional output writer for images, metadata and logs
        on_progress: Optional callback after each accepted token

    Returns:
        EditionResult with accepted tokens, final metadata and skipped slots
    """
    if rng is None:
        rng = random.Random(config.seed)

    result = EditionResult()

    def draw() -> Selection:
        return select_once(
            catalog,
            rules,
            rng,
            mandatory_layers=config.mandatory_layers,
            layer_presence=config.layer_presence,
        )

    for edition in range(1, config.edition_size + 1):
        try:
            selection = find_unique(draw, rules, result.seen, config.max_attempts)
        except MaxAttemptsExceeded as e:
            result.skipped.append(edition)
            logger.warning(f"Could not find unique selection for token #{edition}: {e}")
            continue

        metadata = build_metadata(
            edition,
            selection,
            name_prefix=config.name_prefix,
            description=config.description,
            base_uri=config.base_uri,
            name_template=config.name_template,
            extra=config.extra_metadata,
        )

        image_path = None
        if compositor is not None:
            data = compositor.composite(selection)
            if writer is not None:
                image_path = writer.write_image(edition, data)
        if writer is not None:
            writer.persist(edition, metadata.to_record())

        token = Token(
            edition=edition,
            selection=selection,
            fingerprint=fingerprint(selection),
            metadata=metadata,
            image_path=image_path,
        )
        result.tokens.append(token)
        result.fingerprints.append(token.fingerprint)

        if on_progress:
            on_progress(token, config.edition_size)

    result.metadata = [t.metadata for t in result.tokens]

    if config.shuffle_metadata and result.tokens:
        result.metadata = shuffle_metadata(result.metadata, config, rng)
        result.shuffled = True
        if writer is not None:
            writer.clear_metadata()
            for record in result.metadata:
                writer.persist(record.edition, record.to_record())

    if writer is not None:
        writer.write_collection([m.to_record() for m in result.metadata])
        writer.write_fingerprints(result.fingerprints)

    logger.info(
        f"Edition done: {len(result.tokens)}/{config.edition_size} tokens, "
        f"{result.shortfall} skipped"
    )
    return result
