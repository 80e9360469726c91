from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class UserError:
    field: Optional[List[str]]
    message: str


class OrderSplitterError(Exception):
    """Base exception for all order splitter errors."""


class CredentialsMissingError(OrderSplitterError):
    """No Admin API access token could be resolved."""


class GatewayError(OrderSplitterError):
    """A call to the Shopify Admin API did not succeed."""


class RemoteTransportError(GatewayError):
    """Network, HTTP status or top-level GraphQL failure."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteValidationError(GatewayError):
    """The API answered but rejected the request with field errors."""

    def __init__(self, action: str, errors: Sequence[UserError]):
        self.action = action
        self.errors = list(errors)
        joined = "; ".join(error.message for error in self.errors)
        super().__init__(f"Failed to {action}: {joined}")
