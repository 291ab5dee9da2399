"""Per-request portal principal."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class PortalSession:
    """Authorization context derived from a valid portal token.

    Built fresh for every request from the presented token and never
    cached or persisted.
    """

    client_id: str
    company_id: str
    email: str
    token_id: UUID
