"""
Client domain models.
Clients are managed elsewhere; the export pipeline only reads their revenue roll-ups.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class ClientSummary:
    """Revenue roll-up for one client, as returned by the top-clients aggregate."""

    client_name: str
    client_company: Optional[str]
    total_revenue: Decimal
    invoice_count: int
    paid_amount: Decimal
