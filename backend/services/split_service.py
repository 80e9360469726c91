import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from config import Settings, settings as default_settings
from errors import GatewayError
from models import DraftSpecification, Order, OrderRef
from repositories.order_repository import OrderGateway
from services.order_splitter.allocation import split_discount, split_shipping, subtotal
from services.order_splitter.classifier import ClassifiedItems, classify_line_items
from services.order_splitter.draft_builder import Region, build_draft_specification

logger = logging.getLogger("order-splitter")

METAFIELD_NAMESPACE = "order_splitter"
METAFIELD_KEY = "split_orders"
CANCEL_REASON = "OTHER"
CANCEL_STAFF_NOTE = "Auto-split into domestic / international fulfillment orders"

SKIP_NOT_FOUND = "Order not found"
SKIP_ALREADY_PROCESSED = "Already processed"


class SplitStage(str, Enum):
    ALLOCATED = "allocated"
    TAGGED = "tagged"
    CANCELLED = "cancelled"
    DRAFTS_CREATED = "drafts_created"


@dataclass(frozen=True)
class SplitResult:
    action: str
    reason: Optional[str] = None
    domestic: Optional[OrderRef] = None
    international: Optional[OrderRef] = None

    @classmethod
    def skipped(cls, reason: str) -> "SplitResult":
        return cls(action="skipped", reason=reason)

    @classmethod
    def no_split_needed(cls) -> "SplitResult":
        return cls(action="no-split-needed")

    @classmethod
    def split(cls, domestic: OrderRef, international: OrderRef) -> "SplitResult":
        return cls(action="split", domestic=domestic, international=international)


@dataclass(frozen=True)
class SplitPreview:
    order: Order
    classified: ClassifiedItems
    already_processed: bool

    @property
    def needs_split(self) -> bool:
        return self.classified.needs_split


class SplitService:
    """Replaces a mixed-region order with one domestic and one international order.

    Every remote call is attempted once. The processed tag is written before
    the original is cancelled, so a crash after that point leaves the order
    marked and it will not be split twice. Failures after the cancel are
    raised, not compensated.
    """

    def __init__(self, gateway: OrderGateway, settings: Settings = default_settings) -> None:
        self.gateway = gateway
        self.settings = settings

    def _is_processed(self, order: Order) -> bool:
        return order.has_any_tag(*self.settings.marker_tags)

    async def resolve_order_id(
        self, order_id: Optional[str] = None, order_number: Optional[str] = None
    ) -> Optional[str]:
        if order_id:
            return order_id
        if order_number:
            return await self.gateway.find_order_id_by_number(order_number)
        return None

    async def preview_split(self, order_id: str) -> Optional[SplitPreview]:
        order = await self.gateway.fetch_order(order_id)
        if order is None:
            return None
        return SplitPreview(
            order=order,
            classified=classify_line_items(order.line_items, self.settings.split_tag),
            already_processed=self._is_processed(order),
        )

    async def run_split(self, order_id: str) -> SplitResult:
        order = await self.gateway.fetch_order(order_id)
        if order is None:
            return SplitResult.skipped(SKIP_NOT_FOUND)

        if self._is_processed(order):
            logger.info("Skipping already-processed order %s (%s)", order.name, order.id)
            return SplitResult.skipped(SKIP_ALREADY_PROCESSED)

        classified = classify_line_items(order.line_items, self.settings.split_tag)
        if not classified.needs_split:
            logger.info(
                "No split needed for %s: domestic=%s international=%s",
                order.name,
                len(classified.domestic),
                len(classified.international),
            )
            return SplitResult.no_split_needed()

        logger.info(
            "Splitting order %s: domestic=%s international=%s",
            order.name,
            len(classified.domestic),
            len(classified.international),
        )
        stage = SplitStage.ALLOCATED
        try:
            specs = self._build_specs(order, classified)
            await self._mark_processed(order)
            stage = SplitStage.TAGGED
            await self._cancel_original(order)
            stage = SplitStage.CANCELLED
            drafts = await self._create_drafts(specs)
            stage = SplitStage.DRAFTS_CREATED
            domestic, international = await self._complete_drafts(drafts)
        except GatewayError as exc:
            logger.error(
                "Split of %s aborted after stage %s: %s", order.name, stage.value, exc
            )
            raise

        await self._write_cross_reference(order, domestic, international)
        logger.info(
            "Order split complete: %s -> %s, %s", order.name, domestic.name, international.name
        )
        return SplitResult.split(domestic, international)

    def _build_specs(
        self, order: Order, classified: ClassifiedItems
    ) -> List[DraftSpecification]:
        shipping = split_shipping(order.shipping_lines)
        discount = split_discount(
            order.total_discount_amount,
            subtotal(classified.domestic),
            subtotal(classified.international),
        )
        return [
            build_draft_specification(
                order,
                classified.domestic,
                Region.DOMESTIC,
                shipping.domestic,
                discount.domestic,
                self.settings,
            ),
            build_draft_specification(
                order,
                classified.international,
                Region.INTERNATIONAL,
                shipping.international,
                discount.international,
                self.settings,
            ),
        ]

    async def _mark_processed(self, order: Order) -> None:
        result = await self.gateway.add_tags(order.id, [self.settings.split_processed_tag])
        result.unwrap("tag original order")

    async def _cancel_original(self, order: Order) -> None:
        result = await self.gateway.cancel_order(
            order.id,
            reason=CANCEL_REASON,
            restock=True,
            notify_customer=False,
            staff_note=CANCEL_STAFF_NOTE,
            refund=False,
        )
        result.unwrap("cancel order")

    async def _create_drafts(self, specs: List[DraftSpecification]) -> List[OrderRef]:
        drafts: List[OrderRef] = []
        for region, spec in zip(Region, specs):
            result = await self.gateway.create_draft(spec)
            drafts.append(result.unwrap(f"create {region.value} draft order"))
        return drafts

    async def _complete_drafts(self, drafts: List[OrderRef]) -> Tuple[OrderRef, OrderRef]:
        outcomes = await asyncio.gather(
            *(self.gateway.complete_draft(draft.id) for draft in drafts),
            return_exceptions=True,
        )
        # Both outcomes are inspected before anything is raised
        for region, outcome in zip(Region, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Completing %s draft failed: %s", region.value, outcome)
            elif not outcome.ok:
                logger.error(
                    "Completing %s draft returned errors: %s", region.value, outcome.errors
                )
        orders = []
        for region, outcome in zip(Region, outcomes):
            if isinstance(outcome, BaseException):
                raise outcome
            orders.append(outcome.unwrap(f"complete {region.value} draft order"))
        return orders[0], orders[1]

    async def _write_cross_reference(
        self, order: Order, domestic: OrderRef, international: OrderRef
    ) -> None:
        value: Dict[str, Any] = {
            "domesticOrderId": domestic.id,
            "domesticOrderName": domestic.name,
            "internationalOrderId": international.id,
            "internationalOrderName": international.name,
        }
        try:
            result = await self.gateway.write_metafield(
                order.id, METAFIELD_NAMESPACE, METAFIELD_KEY, value
            )
            result.unwrap("store split mapping")
        except Exception as exc:
            # The split itself already succeeded
            logger.warning(
                "Failed to store split mapping metafield on %s: %s",
                order.id,
                exc,
                exc_info=True,
            )

