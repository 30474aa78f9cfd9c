"""Request Dependencies — actor identity extraction for mutating routes.

Invariants:
    - Identity is read from the configured header, stripped, never validated here
    - require_actor raises IdentityRequiredError (401) when the header is missing or blank

Design Decisions:
    - Authenticity of the identity is an upstream gateway concern; the ledger
      treats it as an opaque key
"""

from fastapi import Request

from recycle_chain.config import get_settings
from recycle_chain.core.errors import IdentityRequiredError


def optional_actor(request: Request) -> str | None:
    value = request.headers.get(get_settings().identity_header, "").strip()
    return value or None


def require_actor(request: Request) -> str:
    actor = optional_actor(request)
    if actor is None:
        raise IdentityRequiredError(get_settings().identity_header)
    return actor
