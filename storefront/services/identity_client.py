# storefront/services/identity_client.py
from dataclasses import dataclass
from typing import Optional

import requests
from requests import RequestException

from storefront.domain.errors import UpstreamFailure
from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    SUPABASE_URL,
    SUPABASE_SERVICE_ROLE_KEY,
    IDENTITY_TIMEOUT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IdentityUser:
    id: str
    email: Optional[str] = None


class IdentityClient:
    """Resolves a bearer token to a user through the hosted auth service."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None,
                 timeout: int | None = None):
        self.base_url = (base_url if base_url is not None else SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else SUPABASE_SERVICE_ROLE_KEY
        self.timeout = timeout or IDENTITY_TIMEOUT_SECONDS

    @http_retry()
    def _fetch_user(self, token: str) -> requests.Response:
        url = f"{self.base_url}/auth/v1/user"
        logger.debug(f"IdentityClient GET {url}")
        return requests.get(
            url,
            headers={"apikey": self.api_key, "Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )

    def get_user(self, token: str) -> IdentityUser | None:
        """None when the token is rejected, UpstreamFailure when the service is unusable."""
        if not self.base_url:
            raise UpstreamFailure("Identity gateway is not configured")

        try:
            resp = self._fetch_user(token)
        except RequestException as e:
            logger.error(f"Identity gateway unreachable: {e}")
            raise UpstreamFailure("Identity gateway unreachable") from e

        if 400 <= resp.status_code < 500:
            return None
        if not resp.ok:
            logger.error(f"Identity gateway answered {resp.status_code}")
            raise UpstreamFailure(f"Identity gateway error: {resp.status_code}")

        data = resp.json() or {}
        user_id = data.get("id")
        if not user_id:
            return None
        return IdentityUser(id=str(user_id), email=data.get("email"))
