"""Pillow-backed layer compositor."""

import io
import logging

from PIL import Image, ImageOps

from ..core.models import Selection


logger = logging.getLogger(__name__)


class PillowCompositor:
    """Stack trait assets bottom-up in render order onto a transparent canvas.

    Each asset is fitted into the canvas keeping its aspect ratio, centered,
    with transparent padding.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def _fit(self, layer: Image.Image) -> Image.Image:
        if layer.size == (self.width, self.height):
            return layer
        return ImageOps.pad(
            layer,
            (self.width, self.height),
            method=Image.Resampling.LANCZOS,
            color=(0, 0, 0, 0),
        )

    def render(self, selection: Selection) -> Image.Image:
        canvas = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        for pick in selection.ordered():
            if pick.element.path is None:
                logger.debug(f"No asset for {pick.id}, skipping")
                continue
            with Image.open(pick.element.path) as src:
                layer = self._fit(src.convert("RGBA"))
            canvas.alpha_composite(layer)
        return canvas

    def composite(self, selection: Selection) -> bytes:
        buffer = io.BytesIO()
        self.render(selection).save(buffer, format="PNG")
        return buffer.getvalue()
