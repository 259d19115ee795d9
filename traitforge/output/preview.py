"""Preview contact sheet."""

import logging
from pathlib import Path

from PIL import Image

from ..core.models import PreviewConfig


logger = logging.getLogger(__name__)


def build_preview(
    image_paths: list[Path],
    preview: PreviewConfig,
    width: int,
    height: int,
    output_dir: Path,
) -> Path | None:
    """Tile the first ``cols * rows`` images into one sheet on white.

    Returns:
        Path of the written sheet, or None if previews are disabled or
        there is nothing to show
    """
    if not preview.generate or not image_paths:
        return None

    cols, rows, margin = preview.cols, preview.rows, preview.margin
    sheet = Image.new(
        "RGBA",
        (cols * width + (cols + 1) * margin, rows * height + (rows + 1) * margin),
        (255, 255, 255, 255),
    )

    for idx, path in enumerate(image_paths[: cols * rows]):
        r, c = divmod(idx, cols)
        with Image.open(path) as img:
            tile = img.convert("RGBA")
        if tile.size != (width, height):
            tile = tile.resize((width, height), Image.Resampling.LANCZOS)
        sheet.alpha_composite(tile, (margin + c * (width + margin), margin + r * (height + margin)))

    target = Path(output_dir) / preview.filename
    sheet.save(target, format="PNG")
    logger.info(f"Preview sheet written to {target}")
    return target
