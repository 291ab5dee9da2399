"""Security utilities - crypto.

Re-exports all security-related functions for convenience.
"""

from src.portal.core.security.crypto import (
    ADMIN_TOKEN_TYPE,
    AdminPrincipal,
    decode_admin_token,
    decode_token,
    derive_idempotency_key,
    generate_portal_token,
    hash_token,
)

__all__ = [
    # Portal secrets
    "generate_portal_token",
    "hash_token",
    "derive_idempotency_key",
    # Admin identity
    "ADMIN_TOKEN_TYPE",
    "AdminPrincipal",
    "decode_admin_token",
    "decode_token",
]
