"""
Entitlement - In-memory cache of the user's subscription status.

Refreshed at screen focus. Reads hand out an immutable snapshot that
callers pass into store queries.
"""

import logging

from sicilia.errors import EntitlementError
from sicilia.schemas import EntitlementState

from .providers import EntitlementProvider


logger = logging.getLogger(__name__)


class Entitlement:
    """Cached entitlement state backed by a provider."""

    def __init__(self, provider: EntitlementProvider):
        self.provider = provider
        self._state = EntitlementState(is_pro=False)

    @property
    def is_pro(self) -> bool:
        return self._state.is_pro

    def snapshot(self) -> EntitlementState:
        return self._state

    def refresh(self) -> EntitlementState:
        """
        Fetch the current status from the provider.

        A failed fetch is treated as "not pro" and never raises.
        """
        try:
            self._state = self.provider.get_status()
        except EntitlementError as e:
            logger.warning(f"Entitlement fetch failed, assuming free tier: {e}")
            self._state = EntitlementState(is_pro=False)
        return self._state

    def purchase(self) -> EntitlementState:
        """
        Run the purchase flow.

        Raises:
            EntitlementError: If the purchase fails (state is left unchanged)
        """
        try:
            self._state = self.provider.purchase()
        except EntitlementError as e:
            logger.error(f"Purchase failed: {e}")
            raise
        return self._state
