import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _get_list(name: str, fallback: str = "") -> List[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    shopify_store_domain: str = _require_env("SHOPIFY_STORE_DOMAIN")
    shopify_webhook_secret: str = _require_env("SHOPIFY_WEBHOOK_SECRET")
    admin_password: str = _require_env("ADMIN_PASSWORD")
    shopify_api_version: str = os.getenv("SHOPIFY_API_VERSION", "2025-07")
    shopify_admin_access_token: str | None = os.getenv("SHOPIFY_ADMIN_ACCESS_TOKEN")
    shopify_token_file: str = os.getenv("SHOPIFY_TOKEN_FILE", ".token.json")
    encryption_key: str | None = os.getenv("ENCRYPTION_KEY")
    request_timeout_seconds: float = float(
        os.getenv("SHOPIFY_REQUEST_TIMEOUT_SECONDS", "30")
    )
    # Product tag that marks an item as domestically fulfilled
    split_tag: str = os.getenv("SPLIT_TAG", "US")
    split_order_tag: str = os.getenv("SPLIT_ORDER_TAG", "split-order")
    split_processed_tag: str = os.getenv("SPLIT_PROCESSED_TAG", "split-processed")
    split_from_prefix: str = os.getenv("SPLIT_FROM_PREFIX", "split-from-")
    allowed_origins: List[str] = field(
        default_factory=lambda: _get_list("ALLOWED_ORIGINS", "*")
    )

    @property
    def graphql_endpoint(self) -> str:
        return (
            f"https://{self.shopify_store_domain}"
            f"/admin/api/{self.shopify_api_version}/graphql.json"
        )

    @property
    def marker_tags(self) -> tuple[str, str]:
        return self.split_order_tag, self.split_processed_tag


settings = Settings()
