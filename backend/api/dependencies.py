from fastapi import Request

from repositories.order_repository import OrderGateway
from services.split_service import SplitService


def get_split_service(request: Request) -> SplitService:
    client = request.app.state.shopify_client
    return SplitService(OrderGateway(client))
