"""
Sicilia Entitlement - Subscription status gating premium catalog items.
"""

from .providers import (
    EntitlementProvider,
    StaticEntitlementProvider,
    RevenueCatProvider,
    REVENUECAT_BASE_URL,
)
from .session import Entitlement

__all__ = [
    "EntitlementProvider",
    "StaticEntitlementProvider",
    "RevenueCatProvider",
    "REVENUECAT_BASE_URL",
    "Entitlement",
]
