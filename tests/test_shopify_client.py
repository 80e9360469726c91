import json
from dataclasses import replace

import httpx
import pytest
from cryptography.fernet import Fernet

from config import settings
from errors import CredentialsMissingError, RemoteTransportError
from security import encrypt_secret
from shopify import ACCESS_TOKEN_HEADER, CredentialProvider, ShopifyClient, save_token_file


def _client(handler, provider=None):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ShopifyClient(provider or CredentialProvider(settings), settings, http_client=http_client)


@pytest.mark.asyncio
async def test_execute_posts_query_with_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["token"] = request.headers[ACCESS_TOKEN_HEADER]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"shop": {"name": "Test"}}})

    client = _client(handler)
    data = await client.execute("query { shop { name } }", {"x": 1})
    await client.aclose()

    assert data == {"shop": {"name": "Test"}}
    assert seen["url"] == (
        "https://test-shop.myshopify.com/admin/api/2025-07/graphql.json"
    )
    assert seen["token"] == "shpat_test"
    assert seen["body"] == {"query": "query { shop { name } }", "variables": {"x": 1}}


@pytest.mark.asyncio
async def test_http_error_status_is_transport_error():
    client = _client(lambda request: httpx.Response(503))

    with pytest.raises(RemoteTransportError) as excinfo:
        await client.execute("query { shop { name } }")
    await client.aclose()

    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_graphql_errors_are_transport_errors():
    client = _client(
        lambda request: httpx.Response(
            200, json={"errors": [{"message": "Throttled"}, {"message": "Try later"}]}
        )
    )

    with pytest.raises(RemoteTransportError, match="Throttled; Try later"):
        await client.execute("query { shop { name } }")
    await client.aclose()


@pytest.mark.asyncio
async def test_plain_string_graphql_errors_are_transport_errors():
    client = _client(lambda request: httpx.Response(200, json={"errors": ["Throttled"]}))

    with pytest.raises(RemoteTransportError, match="Throttled"):
        await client.execute("query { shop { name } }")
    await client.aclose()


@pytest.mark.asyncio
async def test_missing_data_is_transport_error():
    client = _client(lambda request: httpx.Response(200, json={}))

    with pytest.raises(RemoteTransportError, match="missing data"):
        await client.execute("query { shop { name } }")
    await client.aclose()


@pytest.mark.asyncio
async def test_network_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(RemoteTransportError, match="connection refused"):
        await client.execute("query { shop { name } }")
    await client.aclose()


def test_provider_reads_encrypted_token_file(tmp_path):
    key = Fernet.generate_key().decode()
    token_file = tmp_path / "token.json"
    save_token_file(token_file, encrypt_secret("shpat_from_file", key))
    local = replace(
        settings,
        shopify_admin_access_token=None,
        shopify_token_file=str(token_file),
        encryption_key=key,
    )

    provider = CredentialProvider(local)

    assert provider.access_token() == "shpat_from_file"
    token_file.unlink()
    assert provider.access_token() == "shpat_from_file"


def test_provider_without_token_raises(tmp_path):
    local = replace(
        settings,
        shopify_admin_access_token=None,
        shopify_token_file=str(tmp_path / "missing.json"),
    )

    with pytest.raises(CredentialsMissingError):
        CredentialProvider(local).access_token()
