from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from collections.abc import Mapping

from ironshop.services.catalog import Catalog, normalize_quantities, parse_quantity
from ironshop.services.snapshot import field


@dataclass(frozen=True)
class ResolvedTotal:
    base_amount: int | None
    final_total: int | None
    item_quantities: dict[str, int] | None

    @property
    def billable(self) -> bool:
        return self.final_total is not None


def _rupees(x) -> int:
    # nearest ₹1, halves away from zero
    return int(Decimal(x).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_amount(raw) -> int | None:
    """Positive whole-rupee amount from user input; None when absent or malformed."""
    value = parse_quantity(raw.strip() if isinstance(raw, str) else raw)
    return value if value is not None and value > 0 else None


def items_subtotal(quantities: Mapping | None, catalog: Catalog) -> int:
    subtotal = 0
    for key, qty in normalize_quantities(quantities).items():
        price = catalog.unit_price(key)
        if price is None:
            continue  # stale key from an older rate card
        subtotal += qty * price
    return subtotal


def apply_discount(base_amount: int, discount_percent) -> int:
    if not discount_percent or Decimal(str(discount_percent)) <= 0:
        return int(base_amount)
    base = Decimal(int(base_amount))
    discounted = base - base * Decimal(str(discount_percent)) / Decimal(100)
    return _rupees(discounted)


def resolve_total(
    order,
    catalog: Catalog,
    override_base_amount=None,
    override_discount_percent=None,
    override_item_quantities: Mapping | None = None,
    ignore_manual_base: bool = False,
) -> ResolvedTotal:
    """Work out the chargeable total for an order.

    Itemised billing always wins over a manual base amount. With
    ``ignore_manual_base`` (the caller is reacting to an items edit) a manual
    amount is never used as a fallback, so emptying the items leaves the order
    unbilled instead of reviving a stale total.

    Returns ``final_total=None`` when no positive base can be resolved; that
    means "not billable yet", not an error.
    """
    if override_item_quantities is not None:
        quantities = normalize_quantities(override_item_quantities)
    else:
        quantities = normalize_quantities(field(order, "items_json"))

    base_amount = None
    subtotal = items_subtotal(quantities, catalog)
    if subtotal > 0:
        base_amount = subtotal
    elif not ignore_manual_base:
        base_amount = parse_amount(override_base_amount) or parse_amount(field(order, "base_amount"))

    if not base_amount:
        return ResolvedTotal(None, None, quantities or None)

    final_total = apply_discount(base_amount, override_discount_percent)
    return ResolvedTotal(base_amount, final_total, quantities or None)


def estimate_booking(items: Mapping | None, catalog: Catalog) -> dict:
    """Customer-side estimate stored at booking time (before any discount)."""
    subtotal = items_subtotal(items, catalog)
    return {
        "items_estimated_total": subtotal or None,
        "estimated_total": subtotal or None,
    }
