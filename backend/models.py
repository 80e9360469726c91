from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _unwrap_nodes(value: Any) -> Any:
    if isinstance(value, dict) and "nodes" in value:
        return value["nodes"] or []
    return value


class ShopifyModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Money(ShopifyModel):
    amount: Decimal
    currency_code: str = Field(alias="currencyCode")


class MoneyBag(ShopifyModel):
    shop_money: Money = Field(alias="shopMoney")


class Address(ShopifyModel):
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    company: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    province_code: Optional[str] = Field(default=None, alias="provinceCode")
    country: Optional[str] = None
    country_code: Optional[str] = Field(default=None, alias="countryCodeV2")
    zip: Optional[str] = None
    phone: Optional[str] = None


class Product(ShopifyModel):
    id: str
    tags: List[str] = []


class Variant(ShopifyModel):
    id: str


class DiscountAllocation(ShopifyModel):
    allocated_amount: MoneyBag = Field(alias="allocatedAmountSet")


class LineItem(ShopifyModel):
    id: str
    title: str
    quantity: int = Field(gt=0)
    original_unit_price: MoneyBag = Field(alias="originalUnitPriceSet")
    discount_allocations: List[DiscountAllocation] = Field(
        default_factory=list, alias="discountAllocations"
    )
    variant: Optional[Variant] = None
    product: Optional[Product] = None

    @property
    def unit_price(self) -> Decimal:
        return self.original_unit_price.shop_money.amount

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def product_tags(self) -> List[str]:
        return list(self.product.tags) if self.product else []


class ShippingLine(ShopifyModel):
    title: str
    original_price: MoneyBag = Field(alias="originalPriceSet")

    @property
    def amount(self) -> Decimal:
        return self.original_price.shop_money.amount


class Customer(ShopifyModel):
    id: str


class Order(ShopifyModel):
    id: str
    name: str
    tags: List[str] = []
    note: Optional[str] = None
    email: Optional[str] = None
    customer: Optional[Customer] = None
    shipping_address: Optional[Address] = Field(default=None, alias="shippingAddress")
    billing_address: Optional[Address] = Field(default=None, alias="billingAddress")
    total_shipping: MoneyBag = Field(alias="totalShippingPriceSet")
    total_discounts: MoneyBag = Field(alias="totalDiscountsSet")
    shipping_lines: List[ShippingLine] = Field(
        default_factory=list, alias="shippingLines"
    )
    line_items: List[LineItem] = Field(default_factory=list, alias="lineItems")

    @field_validator("shipping_lines", "line_items", mode="before")
    @classmethod
    def _flatten_connection(cls, value: Any) -> Any:
        return _unwrap_nodes(value)

    @property
    def number(self) -> str:
        return self.name.replace("#", "", 1)

    @property
    def total_shipping_amount(self) -> Decimal:
        return self.total_shipping.shop_money.amount

    @property
    def total_discount_amount(self) -> Decimal:
        return self.total_discounts.shop_money.amount

    @property
    def currency(self) -> str:
        return self.total_shipping.shop_money.currency_code

    def has_any_tag(self, *tags: str) -> bool:
        return any(tag in self.tags for tag in tags)


# Replacement order requests


@dataclass(frozen=True)
class OrderRef:
    id: str
    name: str


@dataclass(frozen=True)
class MailingAddressInput:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country_code: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_address(cls, address: Optional[Address]) -> Optional["MailingAddressInput"]:
        if address is None:
            return None
        return cls(
            first_name=address.first_name,
            last_name=address.last_name,
            company=address.company,
            address1=address.address1,
            address2=address.address2,
            city=address.city,
            province=address.province,
            country_code=address.country_code,
            zip=address.zip,
            phone=address.phone,
        )

    def to_input(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "company": self.company,
            "address1": self.address1,
            "address2": self.address2,
            "city": self.city,
            "province": self.province,
            "countryCode": self.country_code,
            "zip": self.zip,
            "phone": self.phone,
        }


@dataclass(frozen=True)
class ShippingLineInput:
    title: str
    price: Decimal


@dataclass(frozen=True)
class AppliedDiscountInput:
    title: str
    value: Decimal
    description: str
    value_type: str = "FIXED_AMOUNT"


@dataclass(frozen=True)
class DraftLineItemInput:
    variant_id: str
    quantity: int


@dataclass(frozen=True)
class DraftSpecification:
    note: str
    tags: List[str]
    shipping_line: ShippingLineInput
    line_items: List[DraftLineItemInput]
    customer_id: Optional[str] = None
    email: Optional[str] = None
    shipping_address: Optional[MailingAddressInput] = None
    billing_address: Optional[MailingAddressInput] = None
    applied_discount: Optional[AppliedDiscountInput] = None

    def to_input(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "email": self.email,
            "note": self.note,
            "tags": list(self.tags),
            "shippingLine": {
                "title": self.shipping_line.title,
                "price": f"{self.shipping_line.price:.2f}",
            },
            "lineItems": [
                {"variantId": item.variant_id, "quantity": item.quantity}
                for item in self.line_items
            ],
        }
        if self.customer_id:
            payload["customerId"] = self.customer_id
        if self.shipping_address is not None:
            payload["shippingAddress"] = self.shipping_address.to_input()
        if self.billing_address is not None:
            payload["billingAddress"] = self.billing_address.to_input()
        if self.applied_discount is not None:
            payload["appliedDiscount"] = {
                "title": self.applied_discount.title,
                "value": float(self.applied_discount.value),
                "valueType": self.applied_discount.value_type,
                "description": self.applied_discount.description,
            }
        return payload
