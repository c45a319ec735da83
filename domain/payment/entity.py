"""
Payment domain entities - orders and callback decisions.

Nothing here is persisted: orders live at the gateway and callback events
only end up in the audit log.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Optional

from shared.codes.payment_codes import RAZORPAY_STATUS_CAPTURED


def _utc_now_z() -> str:
    ts = datetime.now(timezone.utc)
    return ts.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Order:
    """Gateway order created for a course; `id` is the correlation key."""

    id: str
    amount: int  # minor units
    currency: str
    course: str


@dataclass(frozen=True)
class CallbackEvent:
    """
    Consolidated record of one callback reconciliation.

    Captures both trust signals (signature and status inquiry) so the
    audit trail shows why a callback was accepted or rejected.
    """

    payment_id: Optional[str]
    order_id: Optional[str]
    signature_received: Optional[str]
    signature_generated: Optional[str]
    signature_match: bool
    status_api: Optional[str]
    timestamp: str = field(default_factory=_utc_now_z)
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Accepted only when the signature matches AND the gateway reports capture."""
        return self.signature_match is True and self.status_api == RAZORPAY_STATUS_CAPTURED

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        if record["error"] is None:
            record.pop("error")
        return record
