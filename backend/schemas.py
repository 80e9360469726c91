from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models import Address, LineItem
from services.split_service import SplitPreview, SplitResult


class OrderLookupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: Optional[str] = Field(
        default=None,
        alias="orderId",
        description="Admin API order GID, e.g. gid://shopify/Order/1"
    )
    order_number: Optional[str] = Field(
        default=None,
        alias="orderNumber",
        description="Human order number, with or without '#'"
    )


class SplitResponse(BaseModel):
    action: str
    reason: Optional[str] = None
    domestic_order_id: Optional[str] = None
    domestic_order_name: Optional[str] = None
    international_order_id: Optional[str] = None
    international_order_name: Optional[str] = None

    @classmethod
    def from_result(cls, result: SplitResult) -> "SplitResponse":
        return cls(
            action=result.action,
            reason=result.reason,
            domestic_order_id=result.domestic.id if result.domestic else None,
            domestic_order_name=result.domestic.name if result.domestic else None,
            international_order_id=(
                result.international.id if result.international else None
            ),
            international_order_name=(
                result.international.name if result.international else None
            ),
        )


class PreviewItem(BaseModel):
    title: str
    quantity: int
    unit_price: Decimal
    product_tags: List[str]

    @classmethod
    def from_line_item(cls, item: LineItem) -> "PreviewItem":
        return cls(
            title=item.title,
            quantity=item.quantity,
            unit_price=item.unit_price,
            product_tags=item.product_tags,
        )


class OrderSummary(BaseModel):
    id: str
    name: str
    tags: List[str]
    email: Optional[str]
    shipping_address: Optional[Dict[str, Any]]
    total_shipping: Decimal
    total_discount: Decimal
    currency: str


class PreviewResponse(BaseModel):
    order: OrderSummary
    domestic_items: List[PreviewItem]
    international_items: List[PreviewItem]
    needs_split: bool
    already_processed: bool

    @classmethod
    def from_preview(cls, preview: SplitPreview) -> "PreviewResponse":
        order = preview.order
        return cls(
            order=OrderSummary(
                id=order.id,
                name=order.name,
                tags=order.tags,
                email=order.email,
                shipping_address=_dump_address(order.shipping_address),
                total_shipping=order.total_shipping_amount,
                total_discount=order.total_discount_amount,
                currency=order.currency,
            ),
            domestic_items=[
                PreviewItem.from_line_item(item) for item in preview.classified.domestic
            ],
            international_items=[
                PreviewItem.from_line_item(item)
                for item in preview.classified.international
            ],
            needs_split=preview.needs_split,
            already_processed=preview.already_processed,
        )


def _dump_address(address: Optional[Address]) -> Optional[Dict[str, Any]]:
    if address is None:
        return None
    return address.model_dump()


class ApiInfoResponse(BaseModel):
    store_domain: str
    api_version: str
    split_tag: str
    marker_tags: List[str]
