"""
Session-level schemas: entitlement state and tutor chat messages.
"""

from pydantic import BaseModel, ConfigDict
from typing import Literal


class EntitlementState(BaseModel):
    """Snapshot of the subscription status. Cached in memory only."""
    model_config = ConfigDict(frozen=True)

    is_pro: bool = False


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str
