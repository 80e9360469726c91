from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from models import LineItem, ShippingLine

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
DEFAULT_SHIPPING_TITLE = "Shipping"
DISCOUNT_TITLE = "Proportional discount from original order"


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Allocation:
    amount: Decimal
    title: str


@dataclass(frozen=True)
class ShippingAllocation:
    domestic: Allocation
    international: Allocation


@dataclass(frozen=True)
class DiscountAllocation:
    domestic: Optional[Allocation]
    international: Optional[Allocation]


def subtotal(items: Iterable[LineItem]) -> Decimal:
    return sum((item.subtotal for item in items), ZERO)


def split_shipping(shipping_lines: Sequence[ShippingLine]) -> ShippingAllocation:
    """Full shipping charge goes to the domestic order, the international one ships at zero.

    The title comes from the first shipping line; the amount is the sum of
    all lines so nothing charged on the original order is dropped.
    """
    title = shipping_lines[0].title if shipping_lines else DEFAULT_SHIPPING_TITLE
    amount = round2(sum((line.amount for line in shipping_lines), ZERO))
    return ShippingAllocation(
        domestic=Allocation(amount=amount, title=title),
        international=Allocation(amount=ZERO, title=title),
    )


def _share(amount: Decimal) -> Optional[Allocation]:
    if amount <= 0:
        return None
    return Allocation(amount=amount, title=DISCOUNT_TITLE)


def split_discount(
    total_discount: Decimal, domestic_subtotal: Decimal, international_subtotal: Decimal
) -> DiscountAllocation:
    """Split the order discount by subtotal weight.

    The international share is the remainder after rounding the domestic
    share, so both shares always add up to the rounded original discount.
    A share of zero is reported as no discount.
    """
    combined = domestic_subtotal + international_subtotal
    if total_discount == 0 or combined == 0:
        return DiscountAllocation(domestic=None, international=None)

    domestic_share = round2(total_discount * domestic_subtotal / combined)
    international_share = round2(total_discount - domestic_share)
    return DiscountAllocation(
        domestic=_share(domestic_share),
        international=_share(international_share),
    )
