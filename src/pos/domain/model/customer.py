"""Customer: a diner remembered by phone number.

Checkout creates or refreshes a customer whenever the bill carries a
phone number.  Within one restaurant the phone number is the identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ANONYMOUS = "Anonymous"


@dataclass
class Customer:
    id: str
    restaurant_id: str
    phone: str
    name: str = ANONYMOUS
    visits: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def record_visit(self, name: str | None, now: datetime) -> None:
        """Count a checkout; a name given at the counter replaces the stored one."""
        if name:
            self.name = name
        self.visits += 1
        self.updated_at = now
