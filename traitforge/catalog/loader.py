"""Trait catalog discovery from a directory tree.

Each subdirectory of the traits root is one layer; each asset file inside it
is one trait element. Filenames carry an optional rarity weight after the
delimiter, e.g. ``Laser_Eyes#5.png``.
"""

import logging
import re
from pathlib import Path

from ..core.errors import EmptyCatalogError
from ..core.models import Catalog, Layer, TraitElement, build_catalog, trait_key


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".png",)

_ORDER_PREFIX = re.compile(r"^\d+_")
_DIGITS = re.compile(r"(\d+)")


def to_title(text: str) -> str:
    """Strip a leading ``NN_`` ordering prefix and turn underscores into spaces."""
    return _ORDER_PREFIX.sub("", text).replace("_", " ").strip()


def natural_key(text: str) -> list:
    """Sort key that orders embedded numbers numerically ("2_a" < "10_b").

    Names equal up to case or leading zeros are tie-broken on the raw text.
    """
    key = [
        (0, int(part), "") if part.isdigit() else (1, 0, part.lower())
        for part in _DIGITS.split(text)
        if part
    ]
    key.append((2, 0, text))
    return key


def parse_weight(filename: str, delimiter: str = "#") -> tuple[str, int]:
    """Split an asset filename into trait name and rarity weight.

    The weight follows the last delimiter in the file stem. Anything that is
    not a positive integer (missing, zero, negative, non-numeric) means 1.

    Args:
        filename: Asset filename, with or without extension
        delimiter: Rarity delimiter character

    Returns:
        Tuple of (name, weight)
    """
    stem = Path(filename).stem
    idx = stem.rfind(delimiter)
    if idx == -1:
        return stem, 1

    name = stem[:idx]
    raw = stem[idx + len(delimiter):].strip()
    weight = int(raw) if raw.isdecimal() else 0
    return name, weight if weight > 0 else 1


def _list_assets(folder: Path, extensions: tuple[str, ...]) -> list[Path]:
    files = [
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    ]
    return sorted(files, key=lambda f: natural_key(f.name))


def read_layer(folder: Path, delimiter: str = "#", extensions: tuple[str, ...] = DEFAULT_EXTENSIONS) -> Layer:
    """Read one layer directory into a Layer (possibly empty)."""
    layer_name = to_title(folder.name)
    elements = []
    for i, asset in enumerate(_list_assets(folder, extensions)):
        raw_name, weight = parse_weight(asset.name, delimiter)
        name = to_title(raw_name)
        elements.append(
            TraitElement(
                id=trait_key(layer_name, name),
                layer=layer_name,
                name=name,
                weight=weight,
                path=asset,
                index=i,
            )
        )
    return Layer(id=layer_name, elements=tuple(elements))


def load_catalog(
    traits_dir: Path | str,
    delimiter: str = "#",
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> Catalog:
    """Discover layers and trait elements under ``traits_dir``.

    Layer directories are visited in natural order; directories without any
    matching asset are skipped.

    Raises:
        EmptyCatalogError: If the directory is missing or no layer has assets
        CatalogError: If folder or file names collide after normalisation
    """
    root = Path(traits_dir)
    if not root.is_dir():
        raise EmptyCatalogError(f"Traits directory not found: {root}")

    layer_dirs = sorted(
        (d for d in root.iterdir() if d.is_dir()),
        key=lambda d: natural_key(d.name),
    )

    layers = []
    for folder in layer_dirs:
        layer = read_layer(folder, delimiter, extensions)
        if not layer.elements:
            logger.info(f"Skipping layer '{folder.name}': no assets")
            continue
        layers.append(layer)

    if not layers:
        raise EmptyCatalogError(
            f"No layers found under {root}. Add layered {'/'.join(extensions)} files first."
        )

    catalog = build_catalog(layers)
    logger.info(
        f"Loaded catalog from {root}: {len(catalog.layers)} layers, "
        f"{sum(len(layer.elements) for layer in catalog.layers)} traits"
    )
    return catalog
