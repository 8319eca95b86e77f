"""Rate card of billable item types.

Keys are persisted inside ``Order.items_json``; a key must never be reused
for a different item once orders reference it.
"""
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
import math
import re


@dataclass(frozen=True)
class ItemCatalogEntry:
    key: str
    label: str
    unit_price: int


class Catalog(Mapping[str, ItemCatalogEntry]):
    """Immutable key -> entry mapping; ``get`` returns None for unknown keys."""

    def __init__(self, entries: list[ItemCatalogEntry]):
        by_key: dict[str, ItemCatalogEntry] = {}
        for e in entries:
            if e.key in by_key:
                raise ValueError(f"duplicate catalog key: {e.key}")
            if int(e.unit_price) <= 0:
                raise ValueError(f"unit price must be positive: {e.key}")
            by_key[e.key] = e
        self._entries = MappingProxyType(by_key)

    def __getitem__(self, key: str) -> ItemCatalogEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def unit_price(self, key: str) -> int | None:
        entry = self.get(key)
        return entry.unit_price if entry else None


DEFAULT_CATALOG = Catalog([
    # Men
    ItemCatalogEntry("men_shirt_kurta_tshirt", "Shirt / Kurta / T-Shirt", 10),
    ItemCatalogEntry("men_trouser_jeans_shorts_pyjama", "Trouser / Jeans / Shorts / Pyjama", 10),
    ItemCatalogEntry("men_coat_blazer_jacket", "Coat / Blazer / Jacket", 50),
    ItemCatalogEntry("men_dhoti_lungi", "Dhoti / Lungi", 30),
    # Women
    ItemCatalogEntry("women_kurti_top", "Kurti / Top", 10),
    ItemCatalogEntry("women_leggings_pant_salwar_shorts", "Leggings / Pant / Salwar / Shorts", 10),
    ItemCatalogEntry("women_dress", "Dress", 35),
    ItemCatalogEntry("women_simple_saree", "Simple Saree", 45),
    ItemCatalogEntry("women_heavy_silk_saree", "Heavy / Silk Saree", 60),
    ItemCatalogEntry("women_lehenga", "Lehenga", 60),
    # Kids
    ItemCatalogEntry("kids_below5", "Kids wear (below 5 years)", 8),
    # Home
    ItemCatalogEntry("home_pillow_small_towel", "Pillow Cover / Small Towel", 5),
    ItemCatalogEntry("home_curtain_bedsheet_single", "Curtain / Bedsheet (Single)", 30),
    ItemCatalogEntry("home_curtain_bedsheet_double", "Curtain / Bedsheet (Double)", 45),
])


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_quantity(raw) -> int | None:
    """Leading-integer parse ("3", " 4 pcs" -> 4); None when there is no number."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    m = _LEADING_INT.match(str(raw))
    return int(m.group(1)) if m else None


def normalize_quantities(raw: Mapping | None) -> dict[str, int]:
    """Copy of ``raw`` keeping only keys with a positive integer quantity."""
    out: dict[str, int] = {}
    if not raw:
        return out
    for key, val in raw.items():
        qty = parse_quantity(val)
        if qty is not None and qty > 0:
            out[str(key)] = qty
    return out


def merge_item_edits(stored: Mapping | None, edits: Mapping | None) -> dict[str, int]:
    """Overlay per-key edits on stored quantities.

    Blank, zero, negative or unparseable edits remove the key.
    """
    merged = normalize_quantities(stored)
    for key, val in (edits or {}).items():
        qty = parse_quantity(val)
        if qty is None or qty <= 0:
            merged.pop(key, None)
        else:
            merged[key] = qty
    return merged
