# test_catalog.py
import pytest

from ironshop.services.catalog import (
    Catalog, DEFAULT_CATALOG, ItemCatalogEntry, merge_item_edits, normalize_quantities,
)


def test_default_rate_card():
    assert len(DEFAULT_CATALOG) == 14
    assert DEFAULT_CATALOG["men_coat_blazer_jacket"].unit_price == 50
    assert DEFAULT_CATALOG.unit_price("kids_below5") == 8
    assert list(DEFAULT_CATALOG)[0] == "men_shirt_kurta_tshirt"


def test_unknown_key_is_explicitly_absent():
    assert DEFAULT_CATALOG.get("tuxedo") is None
    assert DEFAULT_CATALOG.unit_price("tuxedo") is None
    assert "tuxedo" not in DEFAULT_CATALOG


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATALOG["new"] = ItemCatalogEntry("new", "New", 1)  # type: ignore[index]


def test_catalog_rejects_bad_entries():
    with pytest.raises(ValueError):
        Catalog([ItemCatalogEntry("a", "A", 1), ItemCatalogEntry("a", "A again", 2)])
    with pytest.raises(ValueError):
        Catalog([ItemCatalogEntry("free", "Free", 0)])


def test_normalize_drops_non_positive():
    assert normalize_quantities({"a": 2, "b": 0, "c": -1, "d": "3", "e": "", "f": None}) == {"a": 2, "d": 3}
    assert normalize_quantities({"a": float("inf"), "b": float("-inf"), "c": float("nan"), "d": 2.0}) == {"d": 2}
    assert normalize_quantities(None) == {}


def test_merge_item_edits_overlays_stored():
    stored = {"shirt": 4, "saree": 1}
    merged = merge_item_edits(stored, {"shirt": "", "saree": "2", "towel": 3, "bogus": "x"})
    assert merged == {"saree": 2, "towel": 3}
    # stored mapping is not mutated
    assert stored == {"shirt": 4, "saree": 1}
