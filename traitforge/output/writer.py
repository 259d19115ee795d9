"""Output directory layout: images, per-token metadata, collection and logs."""

import json
import logging
import shutil
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)

COLLECTION_FILE = "_metadata.json"
LOGS_DIR = "_logs"
FINGERPRINT_LOG = "dna.txt"


class DirectoryWriter:
    """Writes edition artifacts under one output directory.

    Layout::

        <output_dir>/<images_subdir>/<n>.png
        <output_dir>/<metadata_subdir>/<n>.json
        <output_dir>/_metadata.json
        <output_dir>/_logs/dna.txt
    """

    def __init__(
        self,
        output_dir: Path | str,
        images_subdir: str = "images",
        metadata_subdir: str = "metadata",
    ) -> None:
        self.output_dir = Path(output_dir)
        self.images_dir = self.output_dir / images_subdir
        self.metadata_dir = self.output_dir / metadata_subdir
        self.logs_dir = self.output_dir / LOGS_DIR

    def ensure_dirs(self) -> None:
        for directory in (self.images_dir, self.metadata_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def write_image(self, edition: int, data: bytes) -> Path:
        path = self.images_dir / f"{edition}.png"
        path.write_bytes(data)
        return path

    def persist(self, token_id: int, record: dict[str, Any]) -> None:
        path = self.metadata_dir / f"{token_id}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)

    def clear_metadata(self) -> None:
        """Empty the per-token metadata directory (used before a reshuffle)."""
        if self.metadata_dir.exists():
            shutil.rmtree(self.metadata_dir)
        self.metadata_dir.mkdir(parents=True, exist_ok=True)

    def write_collection(self, records: list[dict[str, Any]]) -> None:
        path = self.output_dir / COLLECTION_FILE
        with open(path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
        logger.info(f"Wrote {len(records)} records to {path}")

    def write_fingerprints(self, fingerprints: list[str]) -> None:
        path = self.logs_dir / FINGERPRINT_LOG
        path.write_text("\n".join(fingerprints), encoding="utf-8")
