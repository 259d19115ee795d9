"""Tests for trait catalog discovery."""

import pytest
from PIL import Image

from traitforge.catalog import load_catalog, natural_key, parse_weight, to_title
from traitforge.core.errors import CatalogError, EmptyCatalogError
from traitforge.core.models import build_catalog


class TestParseWeight:
    """Tests for filename weight parsing."""

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("Crown#30.png", ("Crown", 30)),
            ("Crown.png", ("Crown", 1)),
            ("Crown#abc.png", ("Crown", 1)),
            ("Crown#.png", ("Crown", 1)),
            ("Crown#0.png", ("Crown", 1)),
            ("Crown#-4.png", ("Crown", 1)),
            ("Crown#2.5.png", ("Crown", 1)),
            ("Gold#Crown#7.png", ("Gold#Crown", 7)),
        ],
    )
    def test_weights(self, filename, expected):
        assert parse_weight(filename) == expected

    def test_custom_delimiter(self):
        assert parse_weight("Crown~12.png", delimiter="~") == ("Crown", 12)
        assert parse_weight("Crown#12.png", delimiter="~") == ("Crown#12", 1)


class TestNames:
    """Tests for display names and ordering."""

    def test_to_title_strips_prefix_and_underscores(self):
        assert to_title("01_Background") == "Background"
        assert to_title("Laser_Beam") == "Laser Beam"
        assert to_title("Plain") == "Plain"

    def test_natural_order(self):
        names = ["10_Hat", "2_Hair", "1_Background"]
        assert sorted(names, key=natural_key) == ["1_Background", "2_Hair", "10_Hat"]

    def test_natural_order_ties_are_stable(self):
        assert sorted(["a.png", "A.png"], key=natural_key) == ["A.png", "a.png"]
        assert sorted(["A.png", "a.png"], key=natural_key) == ["A.png", "a.png"]
        assert sorted(["7_Hat", "07_Hat"], key=natural_key) == ["07_Hat", "7_Hat"]


class TestLoadCatalog:
    """Tests for loading a directory tree."""

    def test_layers_in_natural_order(self, traits_dir):
        catalog = load_catalog(traits_dir)

        assert catalog.layer_names == ["Background", "Base", "Eye"]
        assert [layer.index for layer in catalog.layers] == [0, 1, 2]

    def test_elements(self, traits_dir):
        catalog = load_catalog(traits_dir)

        background = catalog.get_layer("Background")
        assert [(e.name, e.weight) for e in background.elements] == [("Blue", 1), ("Red", 9)]
        assert background.elements[0].id == "Background:Blue"
        assert background.elements[0].path.name == "Blue#1.png"

        eye = catalog.get_layer("Eye")
        assert eye.get("Laser Beam").weight == 1
        assert [e.index for e in eye.elements] == [0, 1]

    def test_empty_layer_skipped(self, traits_dir):
        catalog = load_catalog(traits_dir)
        assert catalog.get_layer("Empty") is None

    def test_missing_dir(self, tmp_path):
        with pytest.raises(EmptyCatalogError):
            load_catalog(tmp_path / "nope")

    def test_no_assets(self, tmp_path):
        (tmp_path / "1_Background").mkdir()
        (tmp_path / "1_Background" / "readme.txt").write_text("x")

        with pytest.raises(EmptyCatalogError):
            load_catalog(tmp_path)


class TestBuildCatalog:
    """Tests for assembling pre-enumerated layers."""

    def test_drops_empty_layers(self, layer_factory):
        catalog = build_catalog([
            layer_factory("A", []),
            layer_factory("B", [("x", 1)]),
        ])

        assert catalog.layer_names == ["B"]
        assert catalog.layers[0].index == 0

    def test_all_empty(self, layer_factory):
        with pytest.raises(EmptyCatalogError):
            build_catalog([layer_factory("A", [])])

    def test_heaviest_first_on_tie(self, layer_factory):
        layer = layer_factory("A", [("x", 2), ("y", 5), ("z", 5)])
        assert layer.heaviest().name == "y"

    def test_duplicate_layer_names(self, layer_factory):
        with pytest.raises(CatalogError, match="Duplicate layer name 'Hat'"):
            build_catalog([
                layer_factory("Hat", [("Cap", 1)]),
                layer_factory("Hat", [("Crown", 1)]),
            ])

    def test_duplicate_trait_names(self, layer_factory):
        with pytest.raises(CatalogError, match="Duplicate trait 'Eye:Red'"):
            build_catalog([layer_factory("Eye", [("Red", 1), ("Red", 3)])])


class TestNameCollisionsOnDisk:
    """Folders and files that collapse to the same display name."""

    def _png(self, path):
        Image.new("RGBA", (2, 2), (0, 0, 0, 255)).save(path)

    def test_layer_folders_collide(self, tmp_path):
        for folder, stem in (("1_Hat", "Cap"), ("2_Hat", "Crown")):
            (tmp_path / folder).mkdir()
            self._png(tmp_path / folder / f"{stem}.png")

        with pytest.raises(CatalogError, match="layer name 'Hat'"):
            load_catalog(tmp_path)

    def test_asset_files_collide(self, tmp_path):
        (tmp_path / "Eye").mkdir()
        self._png(tmp_path / "Eye" / "1_Red.png")
        self._png(tmp_path / "Eye" / "2_Red#4.png")

        with pytest.raises(CatalogError, match="Eye:Red"):
            load_catalog(tmp_path)

    def test_empty_catalog_is_a_catalog_error(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(tmp_path / "nope")
