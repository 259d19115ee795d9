"""Global fixtures for traitforge tests."""

import pytest
import yaml
from PIL import Image

from traitforge.core.models import (
    EditionConfig,
    Layer,
    TraitElement,
    build_catalog,
    trait_key,
)


def make_layer(name, values):
    """Build an in-memory Layer from [(value, weight), ...]."""
    return Layer(
        id=name,
        elements=tuple(
            TraitElement(id=trait_key(name, value), layer=name, name=value, weight=weight, index=i)
            for i, (value, weight) in enumerate(values)
        ),
    )


@pytest.fixture
def layer_factory():
    return make_layer


@pytest.fixture
def sample_catalog():
    """Four-layer catalog with a few weighted traits."""
    return build_catalog([
        make_layer("Background", [("Blue", 1), ("Red", 9)]),
        make_layer("Base", [("Human", 5), ("Alien", 1)]),
        make_layer("Eye", [("Normal", 3), ("Laser", 1)]),
        make_layer("Mouth", [("Smile", 2), ("Fangs", 1), ("Flat", 2)]),
    ])


@pytest.fixture
def small_config():
    """Config without output side effects."""
    return EditionConfig(
        edition_size=5,
        shuffle_metadata=False,
        max_attempts=10000,
        name_prefix="Piggos",
        description="Test edition",
        base_uri="ipfs://cid",
        seed=42,
    )


def _write_png(path, color, size=(8, 8)):
    Image.new("RGBA", size, color).save(path)


@pytest.fixture
def traits_dir(tmp_path):
    """On-disk traits tree with numbered layer folders and weighted files."""
    root = tmp_path / "traits"
    layers = {
        "1_Background": [("Blue#1", (0, 0, 255, 255)), ("Red#9", (255, 0, 0, 255))],
        "2_Base": [("Human", (200, 150, 100, 255))],
        "10_Eye": [("Normal#3", (0, 0, 0, 0)), ("Laser_Beam#1", (0, 255, 0, 128))],
    }
    for folder, files in layers.items():
        (root / folder).mkdir(parents=True)
        for stem, color in files:
            _write_png(root / folder / f"{stem}.png", color)
    (root / "3_Empty").mkdir()
    (root / "notes.txt").write_text("not a layer")
    return root


@pytest.fixture
def config_file(tmp_path, traits_dir):
    """YAML config pointing at the traits fixture."""
    data = {
        "edition_size": 3,
        "width": 8,
        "height": 8,
        "traits_dir": "traits",
        "output_dir": "output",
        "max_attempts": 2000,
        "name_prefix": "Piggos",
        "description": "Test edition",
        "base_uri": "ipfs://cid/",
        "mandatory_layers": ["Background", "Base"],
        "seed": 7,
        "preview": {"generate": True, "cols": 2, "rows": 2, "margin": 1},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return path
