"""
Parcel Status Enumeration.
"""

import enum
from typing import Optional


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.
    
    Status flow:
        REGISTERED → SENT → DELIVERED
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"

    def next(self) -> Optional["ParcelStatus"]:
        """Return the following lifecycle stage, or None once delivered."""
        if self is ParcelStatus.REGISTERED:
            return ParcelStatus.SENT
        if self is ParcelStatus.SENT:
            return ParcelStatus.DELIVERED
        return None
