from enum import Enum
from typing import List, Optional

from config import Settings
from models import (
    AppliedDiscountInput,
    DraftLineItemInput,
    DraftSpecification,
    LineItem,
    MailingAddressInput,
    Order,
    ShippingLineInput,
)

from .allocation import Allocation


class Region(str, Enum):
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"

    @property
    def fulfillment_tag(self) -> str:
        return f"{self.value}-fulfillment"


def _build_note(order: Order, region: Region) -> str:
    parts = [
        f"Split order ({region.value} items) from original order {order.name}.",
        order.note or "",
    ]
    return " ".join(part for part in parts if part)


def _build_tags(order: Order, region: Region, settings: Settings) -> List[str]:
    return [
        settings.split_order_tag,
        f"{settings.split_from_prefix}{order.number}",
        region.fulfillment_tag,
    ]


def _build_line_items(items: List[LineItem]) -> List[DraftLineItemInput]:
    # Only variant-backed items can be re-priced on a draft order
    return [
        DraftLineItemInput(variant_id=item.variant.id, quantity=item.quantity)
        for item in items
        if item.variant is not None
    ]


def build_draft_specification(
    order: Order,
    items: List[LineItem],
    region: Region,
    shipping: Allocation,
    discount: Optional[Allocation],
    settings: Settings,
) -> DraftSpecification:
    applied_discount = None
    if discount is not None:
        applied_discount = AppliedDiscountInput(
            title=discount.title,
            value=discount.amount,
            description=f"Proportional split of discount from {order.name}",
        )

    return DraftSpecification(
        customer_id=order.customer.id if order.customer else None,
        email=order.email,
        note=_build_note(order, region),
        tags=_build_tags(order, region, settings),
        shipping_address=MailingAddressInput.from_address(order.shipping_address),
        billing_address=MailingAddressInput.from_address(order.billing_address),
        shipping_line=ShippingLineInput(title=shipping.title, price=shipping.amount),
        line_items=_build_line_items(items),
        applied_discount=applied_discount,
    )
