"""
Entitlement providers.

A provider answers "is this user pro?" and runs the purchase flow.
RevenueCatProvider talks to the RevenueCat REST API; StaticEntitlementProvider
is a local stand-in for development and tests.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Protocol

import requests

from sicilia.errors import EntitlementError
from sicilia.schemas import EntitlementState


logger = logging.getLogger(__name__)

REVENUECAT_BASE_URL = "https://api.revenuecat.com/v1"
DEFAULT_ENTITLEMENT_ID = "pro"


class EntitlementProvider(Protocol):
    def get_status(self) -> EntitlementState: ...

    def purchase(self) -> EntitlementState: ...


class StaticEntitlementProvider:
    """In-process provider; purchase() always succeeds."""

    def __init__(self, is_pro: bool = False):
        self.is_pro = is_pro

    def get_status(self) -> EntitlementState:
        return EntitlementState(is_pro=self.is_pro)

    def purchase(self) -> EntitlementState:
        self.is_pro = True
        return EntitlementState(is_pro=True)


class RevenueCatProvider:
    """
    RevenueCat REST client.

    The user is pro while the configured entitlement is present on the
    subscriber and has no expiry date or one in the future.
    """

    def __init__(
        self,
        api_key: str,
        app_user_id: str,
        entitlement_id: str = DEFAULT_ENTITLEMENT_ID,
        product_id: Optional[str] = None,
        fetch_token: Optional[str] = None,
        base_url: str = REVENUECAT_BASE_URL,
        timeout: int = 15,
    ):
        if not api_key:
            raise EntitlementError("REVENUECAT_API_KEY not set.")
        self.api_key = api_key
        self.app_user_id = app_user_id
        self.entitlement_id = entitlement_id
        self.product_id = product_id
        self.fetch_token = fetch_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def get_status(self) -> EntitlementState:
        url = f"{self.base_url}/subscribers/{self.app_user_id}"
        payload = self._request("GET", url)
        return EntitlementState(is_pro=self._is_active(payload))

    def purchase(self) -> EntitlementState:
        """Post the store receipt for the configured product."""
        if not self.fetch_token:
            raise EntitlementError("No purchase receipt available")

        body = {
            "app_user_id": self.app_user_id,
            "fetch_token": self.fetch_token,
        }
        if self.product_id:
            body["product_id"] = self.product_id

        payload = self._request("POST", f"{self.base_url}/receipts", json=body)
        return EntitlementState(is_pro=self._is_active(payload))

    def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = requests.request(
                method, url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise EntitlementError(f"Entitlement request failed: {e}") from e

        if response.status_code >= 400:
            raise EntitlementError(
                f"Entitlement service error: HTTP {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise EntitlementError("Entitlement service returned invalid JSON") from e

    def _is_active(self, payload: dict) -> bool:
        entitlements = (payload.get("subscriber") or {}).get("entitlements") or {}
        entitlement = entitlements.get(self.entitlement_id)
        if not entitlement:
            return False

        expires = entitlement.get("expires_date")
        if expires is None:
            return True  # lifetime purchase

        try:
            expires_at = datetime.fromisoformat(expires.replace("Z", "+00:00"))
        except (AttributeError, ValueError) as e:
            raise EntitlementError(f"Unreadable expires_date: {expires!r}") from e
        return expires_at > datetime.now(timezone.utc)
