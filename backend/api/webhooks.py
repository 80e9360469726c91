import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from config import settings
from errors import OrderSplitterError
from schemas import SplitResponse
from security import verify_webhook_signature
from services.split_service import SplitService

from .dependencies import get_split_service

logger = logging.getLogger("order-splitter")

HMAC_HEADER = "X-Shopify-Hmac-Sha256"

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


def _payload_tags(payload: dict) -> list[str]:
    raw = payload.get("tags") or ""
    return [tag.strip() for tag in str(raw).split(",") if tag.strip()]


@router.post("/orders-paid")
async def orders_paid(
    request: Request,
    service: SplitService = Depends(get_split_service),
) -> dict:
    raw_body = await request.body()
    if not verify_webhook_signature(raw_body, request.headers.get(HMAC_HEADER)):
        logger.warning("Webhook HMAC verification failed")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        payload = json.loads(raw_body)
    except ValueError as exc:
        logger.error("Failed to parse webhook payload")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad Request") from exc

    order_id = payload.get("admin_graphql_api_id") if isinstance(payload, dict) else None
    if not order_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing admin_graphql_api_id"
        )
    logger.info("Received orders/paid webhook for %s (%s)", order_id, payload.get("name"))

    # Split orders and already-processed originals announce themselves in the payload
    if set(_payload_tags(payload)) & set(settings.marker_tags):
        logger.info("Skipping %s: marker tag found in webhook payload", order_id)
        return {"action": "skipped", "reason": "Already processed"}

    try:
        result = await service.run_split(order_id)
    except OrderSplitterError as exc:
        # A 5xx makes Shopify redeliver the webhook
        logger.exception("Order split failed for %s", order_id)
        raise HTTPException(status_code=500, detail="Internal Server Error") from exc
    logger.info("Processing complete for %s: %s", order_id, result.action)
    return SplitResponse.from_result(result).model_dump()
