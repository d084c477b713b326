# storefront/domain/context.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    """Identity and role resolved once per request from the bearer token."""

    user_id: str
    email: Optional[str]
    is_admin: bool = False
