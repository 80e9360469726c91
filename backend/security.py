import base64
import hashlib
import hmac

from cryptography.fernet import Fernet

from config import settings


def _fernet(key: str | None = None) -> Fernet:
    key = key or settings.encryption_key
    if not key:
        raise RuntimeError("Missing required environment variable: ENCRYPTION_KEY")
    return Fernet(key)


def encrypt_secret(secret: str, key: str | None = None) -> str:
    return _fernet(key).encrypt(secret.encode("utf-8")).decode("utf-8")


def decrypt_secret(encrypted_value: str, key: str | None = None) -> str:
    return _fernet(key).decrypt(encrypted_value.encode("utf-8")).decode("utf-8")


def webhook_digest(raw_body: bytes, secret: str | None = None) -> str:
    secret = secret or settings.shopify_webhook_secret
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def verify_webhook_signature(
    raw_body: bytes, signature: str | None, secret: str | None = None
) -> bool:
    if not signature:
        return False
    expected = webhook_digest(raw_body, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
