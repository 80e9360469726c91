from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from config import Settings, settings as default_settings
from errors import CredentialsMissingError, RemoteTransportError
from security import decrypt_secret

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


class CredentialProvider:
    """Resolves the Admin API token once and keeps it for the process lifetime.

    The environment variable wins; otherwise the encrypted token file written
    by ``tools/store_token.py`` after installing the app is used.
    """

    def __init__(self, settings: Settings = default_settings) -> None:
        self._settings = settings
        self._token: Optional[str] = None

    def _read_token_file(self) -> Optional[str]:
        path = Path(self._settings.shopify_token_file)
        if not path.is_file():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        encrypted = data.get("access_token_encrypted")
        if not encrypted:
            return None
        return decrypt_secret(encrypted, self._settings.encryption_key)

    def access_token(self) -> str:
        if self._token:
            return self._token
        token = self._settings.shopify_admin_access_token or self._read_token_file()
        if not token:
            raise CredentialsMissingError(
                "No Shopify access token found. Install the app and store the token "
                f"with tools/store_token.py (expected {self._settings.shopify_token_file})."
            )
        self._token = token
        return token


def save_token_file(path: str | os.PathLike, encrypted_token: str) -> None:
    Path(path).write_text(
        json.dumps({"access_token_encrypted": encrypted_token}), encoding="utf-8"
    )


class ShopifyClient:
    def __init__(
        self,
        credential_provider: CredentialProvider,
        settings: Settings = default_settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._credentials = credential_provider
        self._endpoint = settings.graphql_endpoint
        self._http = http_client or httpx.AsyncClient(
            timeout=settings.request_timeout_seconds
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def execute(
        self, query: str, variables: Dict[str, Any] | None = None
    ) -> Dict[str, Any]:
        headers = {
            "Content-Type": "application/json",
            ACCESS_TOKEN_HEADER: self._credentials.access_token(),
        }
        try:
            response = await self._http.post(
                self._endpoint,
                headers=headers,
                json={"query": query, "variables": variables or {}},
            )
        except httpx.HTTPError as exc:
            raise RemoteTransportError(f"Shopify API request failed: {exc}") from exc

        if response.status_code >= 400:
            raise RemoteTransportError(
                f"Shopify API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteTransportError("Shopify API returned invalid JSON") from exc

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(
                str(item.get("message", item) if isinstance(item, dict) else item)
                for item in errors
            )
            raise RemoteTransportError(f"Shopify GraphQL errors: {messages}")

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise RemoteTransportError("Shopify GraphQL response missing data")
        return data


def create_shopify_client(settings: Settings = default_settings) -> ShopifyClient:
    return ShopifyClient(CredentialProvider(settings), settings)
