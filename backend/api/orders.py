import logging

from fastapi import APIRouter, Depends, HTTPException, status

from auth import require_admin
from errors import OrderSplitterError
from schemas import OrderLookupRequest, PreviewResponse, SplitResponse
from services.split_service import SplitService

from .dependencies import get_split_service

logger = logging.getLogger("order-splitter")

router = APIRouter(
    prefix="/api/orders", tags=["orders"], dependencies=[Depends(require_admin)]
)


async def _resolve_order_id(service: SplitService, payload: OrderLookupRequest) -> str:
    if not payload.order_id and not payload.order_number:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide orderNumber or orderId",
        )
    try:
        order_id = await service.resolve_order_id(payload.order_id, payload.order_number)
    except OrderSplitterError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if not order_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order #{payload.order_number.replace('#', '').strip()} not found",
        )
    return order_id


@router.post("/preview", response_model=PreviewResponse)
async def preview_split(
    payload: OrderLookupRequest,
    service: SplitService = Depends(get_split_service),
) -> PreviewResponse:
    order_id = await _resolve_order_id(service, payload)
    try:
        preview = await service.preview_split(order_id)
    except OrderSplitterError as exc:
        logger.error("Preview fetch failed for %s: %s", order_id, exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if preview is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return PreviewResponse.from_preview(preview)


@router.post("/split", response_model=SplitResponse)
async def split_order(
    payload: OrderLookupRequest,
    service: SplitService = Depends(get_split_service),
) -> SplitResponse:
    order_id = await _resolve_order_id(service, payload)
    logger.info("Manual split triggered for %s", order_id)
    try:
        result = await service.run_split(order_id)
    except OrderSplitterError as exc:
        logger.exception("Manual split failed for %s", order_id)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    logger.info("Manual split finished for %s: %s", order_id, result.action)
    return SplitResponse.from_result(result)
