"""
Payment signature verification (HMAC-SHA256 over ``order_id|payment_id``).

Pure domain logic: no IO, the secret is injected by the composition root.
"""
from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

from domain.common.exceptions import SignatureConfigurationError


logger = logging.getLogger(__name__)


class SignatureVerifier:
    """Computes and checks gateway payment signatures.

    The secret never leaves this object; only hex digests do.
    """

    def __init__(self, secret: Optional[str]) -> None:
        self._secret = (secret or "").encode("utf-8")

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def compute_signature(self, order_id: str, payment_id: str) -> str:
        if not self._secret:
            raise SignatureConfigurationError()
        message = f"{order_id}|{payment_id}".encode("utf-8")
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    def verify(self, claimed_signature: Optional[str], order_id: str, payment_id: str) -> bool:
        """Return True iff `claimed_signature` equals the computed digest.

        Fails closed: no secret or no claimed signature means False.
        """
        if not self._secret:
            logger.warning("signature_secret_missing")
            return False
        if not claimed_signature:
            return False
        expected = self.compute_signature(order_id, payment_id)
        return hmac.compare_digest(expected.encode("utf-8"), claimed_signature.encode("utf-8"))
