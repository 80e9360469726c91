"""Shared test fixtures."""

from __future__ import annotations

import os

os.environ.setdefault("SHOPIFY_STORE_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("SHOPIFY_WEBHOOK_SECRET", "webhook-secret")
os.environ.setdefault("ADMIN_PASSWORD", "admin-password")
os.environ.setdefault("SHOPIFY_ADMIN_ACCESS_TOKEN", "shpat_test")

from typing import Any, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402

from errors import UserError  # noqa: E402
from models import DraftSpecification, Order, OrderRef  # noqa: E402
from repositories.order_repository import GatewayResult  # noqa: E402


def money(amount: str, currency: str = "USD") -> Dict[str, Any]:
    return {"shopMoney": {"amount": amount, "currencyCode": currency}}


def line_item(
    item_id: str,
    title: str,
    quantity: int,
    price: str,
    tags: Optional[List[str]] = None,
    *,
    variant: bool = True,
    product: bool = True,
) -> Dict[str, Any]:
    return {
        "id": f"gid://shopify/LineItem/{item_id}",
        "title": title,
        "quantity": quantity,
        "originalUnitPriceSet": money(price),
        "discountAllocations": [],
        "variant": {"id": f"gid://shopify/ProductVariant/{item_id}"} if variant else None,
        "product": (
            {"id": f"gid://shopify/Product/{item_id}", "tags": tags or []}
            if product
            else None
        ),
    }


def order_payload(
    line_items: List[Dict[str, Any]],
    *,
    discount: str = "0.00",
    shipping: str = "0.00",
    shipping_title: str = "Standard",
    tags: Optional[List[str]] = None,
    note: Optional[str] = None,
) -> Dict[str, Any]:
    address = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "company": None,
        "address1": "1 Main St",
        "address2": None,
        "city": "Springfield",
        "province": "Oregon",
        "provinceCode": "OR",
        "country": "United States",
        "countryCodeV2": "US",
        "zip": "97477",
        "phone": None,
    }
    return {
        "id": "gid://shopify/Order/1001",
        "name": "#1001",
        "tags": tags or [],
        "note": note,
        "email": "ada@example.com",
        "customer": {"id": "gid://shopify/Customer/7"},
        "shippingAddress": address,
        "billingAddress": address,
        "totalShippingPriceSet": money(shipping),
        "totalDiscountsSet": money(discount),
        "shippingLines": {
            "nodes": [{"title": shipping_title, "originalPriceSet": money(shipping)}]
        },
        "lineItems": {"nodes": line_items},
    }


def make_order(*args: Any, **kwargs: Any) -> Order:
    return Order.model_validate(order_payload(*args, **kwargs))


@pytest.fixture
def mixed_order() -> Order:
    """Two domestic items ($40) and one international item ($30)."""
    return make_order(
        [
            line_item("1", "Mug", 1, "20.00", ["US", "kitchen"]),
            line_item("2", "Coaster", 2, "10.00", ["us"]),
            line_item("3", "Poster", 1, "30.00", ["EU"]),
        ],
        discount="20.00",
        shipping="15.00",
    )


class FakeGateway:
    """In-memory stand-in for OrderGateway that records every call."""

    def __init__(self, order: Optional[Order] = None) -> None:
        self.order = order
        self.calls: List[tuple] = []
        self.created_specs: List[DraftSpecification] = []
        self.tag_errors: List[UserError] = []
        self.cancel_errors: List[UserError] = []
        self.create_errors: Dict[int, List[UserError]] = {}
        self.complete_errors: Dict[str, List[UserError]] = {}
        self.complete_exception: Optional[Exception] = None
        self.metafield_exception: Optional[Exception] = None
        self.order_numbers: Dict[str, str] = {}

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    async def fetch_order(self, order_id: str) -> Optional[Order]:
        self.calls.append(("fetch_order", order_id))
        if self.order is not None and self.order.id == order_id:
            return self.order
        return None

    async def find_order_id_by_number(self, order_number: str) -> Optional[str]:
        self.calls.append(("find_order_id_by_number", order_number))
        return self.order_numbers.get(order_number.replace("#", "").strip())

    async def add_tags(self, order_id: str, tags: List[str]) -> GatewayResult[str]:
        self.calls.append(("add_tags", order_id, tuple(tags)))
        return GatewayResult(value=order_id, errors=list(self.tag_errors))

    async def cancel_order(self, order_id: str, **kwargs: Any) -> GatewayResult[str]:
        self.calls.append(("cancel_order", order_id, kwargs))
        return GatewayResult(value="gid://shopify/Job/1", errors=list(self.cancel_errors))

    async def create_draft(self, spec: DraftSpecification) -> GatewayResult[OrderRef]:
        index = len(self.created_specs)
        self.calls.append(("create_draft", index))
        self.created_specs.append(spec)
        errors = self.create_errors.get(index, [])
        if errors:
            return GatewayResult(errors=errors)
        draft_number = 500 + index
        return GatewayResult(
            value=OrderRef(
                id=f"gid://shopify/DraftOrder/{draft_number}", name=f"#D{draft_number}"
            )
        )

    async def complete_draft(self, draft_id: str) -> GatewayResult[OrderRef]:
        self.calls.append(("complete_draft", draft_id))
        if self.complete_exception is not None and draft_id.endswith("501"):
            raise self.complete_exception
        errors = self.complete_errors.get(draft_id, [])
        if errors:
            return GatewayResult(errors=errors)
        number = draft_id.rsplit("/", 1)[-1]
        return GatewayResult(
            value=OrderRef(id=f"gid://shopify/Order/{number}", name=f"#{number}")
        )

    async def write_metafield(
        self, order_id: str, namespace: str, key: str, value: Dict[str, Any]
    ) -> GatewayResult[str]:
        self.calls.append(("write_metafield", order_id, namespace, key, value))
        if self.metafield_exception is not None:
            raise self.metafield_exception
        return GatewayResult(value=order_id)


@pytest.fixture
def fake_gateway(mixed_order: Order) -> FakeGateway:
    return FakeGateway(mixed_order)
