"""Cryptographic utilities - portal secrets, token hashing, admin JWT checks."""

import secrets
from dataclasses import dataclass
from hashlib import sha256
from typing import Any

from jose import JWTError, jwt

from src.portal.core.config import get_settings

ADMIN_TOKEN_TYPE = "admin"


@dataclass(frozen=True)
class AdminPrincipal:
    """Staff member authenticated by the primary identity provider."""

    subject: str
    company_id: str


def generate_portal_token() -> str:
    """Generate an unguessable portal secret (hex encoded)."""
    settings = get_settings()
    return secrets.token_hex(settings.portal_token_bytes)


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def derive_idempotency_key(invoice_id: str, client_id: str, amount_minor: int, nonce: str) -> str:
    """Derive a stable gateway idempotency key for one payment attempt."""
    material = f"{invoice_id}:{client_id}:{amount_minor}:{nonce}"
    return sha256(material.encode()).hexdigest()


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.admin_jwt_secret_key,
            algorithms=[settings.admin_jwt_algorithm],
        )
    except JWTError:
        return None


def decode_admin_token(token: str) -> AdminPrincipal | None:
    """Decode an admin JWT into a principal. Returns None if not a usable admin token."""
    payload = decode_token(token)
    if payload is None or payload.get("type") != ADMIN_TOKEN_TYPE:
        return None
    subject = payload.get("sub")
    company_id = payload.get("company_id")
    if not subject or not company_id:
        return None
    return AdminPrincipal(subject=str(subject), company_id=str(company_id))
