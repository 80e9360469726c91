from config import settings
from schemas import ApiInfoResponse


def get_api_info() -> ApiInfoResponse:
    return ApiInfoResponse(
        store_domain=settings.shopify_store_domain,
        api_version=settings.shopify_api_version,
        split_tag=settings.split_tag,
        marker_tags=list(settings.marker_tags),
    )
