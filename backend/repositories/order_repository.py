from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from errors import RemoteTransportError, RemoteValidationError, UserError
from models import DraftSpecification, Order, OrderRef
from repositories.graphql import (
    DRAFT_ORDER_COMPLETE,
    DRAFT_ORDER_CREATE,
    GET_ORDER_BY_NUMBER,
    GET_ORDER_WITH_PRODUCT_TAGS,
    ORDER_CANCEL,
    ORDER_UPDATE,
    TAGS_ADD,
)
from shopify import ShopifyClient

T = TypeVar("T")


@dataclass(frozen=True)
class GatewayResult(Generic[T]):
    value: Optional[T] = None
    errors: List[UserError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self, action: str) -> T:
        if self.errors:
            raise RemoteValidationError(action, self.errors)
        if self.value is None:
            raise RemoteTransportError(f"Shopify returned no result for: {action}")
        return self.value


def _parse_user_errors(raw: Any) -> List[UserError]:
    if not isinstance(raw, list):
        return []
    return [
        UserError(field=item.get("field"), message=str(item.get("message") or ""))
        for item in raw
        if isinstance(item, dict)
    ]


def _mutation_payload(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    payload = data.get(key)
    if not isinstance(payload, dict):
        raise RemoteTransportError(f"Shopify response missing {key}")
    return payload


class OrderGateway:
    """Typed wrappers around the Admin API calls the splitter needs."""

    def __init__(self, client: ShopifyClient) -> None:
        self._client = client

    async def fetch_order(self, order_id: str) -> Optional[Order]:
        data = await self._client.execute(GET_ORDER_WITH_PRODUCT_TAGS, {"id": order_id})
        raw = data.get("order")
        if not raw:
            return None
        return Order.model_validate(raw)

    async def find_order_id_by_number(self, order_number: str) -> Optional[str]:
        cleaned = order_number.replace("#", "").strip()
        if not cleaned:
            return None
        data = await self._client.execute(
            GET_ORDER_BY_NUMBER, {"query": f"name:#{cleaned}"}
        )
        nodes = (data.get("orders") or {}).get("nodes") or []
        if not nodes:
            return None
        return str(nodes[0]["id"])

    async def add_tags(self, order_id: str, tags: List[str]) -> GatewayResult[str]:
        data = await self._client.execute(TAGS_ADD, {"id": order_id, "tags": tags})
        payload = _mutation_payload(data, "tagsAdd")
        node = payload.get("node") or {}
        return GatewayResult(
            value=node.get("id") or order_id,
            errors=_parse_user_errors(payload.get("userErrors")),
        )

    async def cancel_order(
        self,
        order_id: str,
        *,
        reason: str,
        restock: bool,
        notify_customer: bool,
        staff_note: str,
        refund: bool,
    ) -> GatewayResult[str]:
        data = await self._client.execute(
            ORDER_CANCEL,
            {
                "orderId": order_id,
                "reason": reason,
                "restock": restock,
                "notifyCustomer": notify_customer,
                "staffNote": staff_note,
                "refundMethod": {"originalPaymentMethodsRefund": refund},
            },
        )
        payload = _mutation_payload(data, "orderCancel")
        job = payload.get("job") or {}
        return GatewayResult(
            value=job.get("id") or order_id,
            errors=_parse_user_errors(payload.get("orderCancelUserErrors")),
        )

    async def create_draft(self, spec: DraftSpecification) -> GatewayResult[OrderRef]:
        data = await self._client.execute(DRAFT_ORDER_CREATE, {"input": spec.to_input()})
        payload = _mutation_payload(data, "draftOrderCreate")
        draft = payload.get("draftOrder")
        return GatewayResult(
            value=OrderRef(id=draft["id"], name=draft["name"]) if draft else None,
            errors=_parse_user_errors(payload.get("userErrors")),
        )

    async def complete_draft(self, draft_id: str) -> GatewayResult[OrderRef]:
        """Turns a draft into a real order, marked paid without a new charge."""
        data = await self._client.execute(DRAFT_ORDER_COMPLETE, {"id": draft_id})
        payload = _mutation_payload(data, "draftOrderComplete")
        order = (payload.get("draftOrder") or {}).get("order")
        return GatewayResult(
            value=OrderRef(id=order["id"], name=order["name"]) if order else None,
            errors=_parse_user_errors(payload.get("userErrors")),
        )

    async def write_metafield(
        self, order_id: str, namespace: str, key: str, value: Dict[str, Any]
    ) -> GatewayResult[str]:
        data = await self._client.execute(
            ORDER_UPDATE,
            {
                "input": {
                    "id": order_id,
                    "metafields": [
                        {
                            "namespace": namespace,
                            "key": key,
                            "value": json.dumps(value),
                            "type": "json",
                        }
                    ],
                }
            },
        )
        payload = _mutation_payload(data, "orderUpdate")
        order = payload.get("order") or {}
        return GatewayResult(
            value=order.get("id") or order_id,
            errors=_parse_user_errors(payload.get("userErrors")),
        )
