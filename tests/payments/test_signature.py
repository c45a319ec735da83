import pytest

from domain.common.exceptions import SignatureConfigurationError
from domain.services.signature import SignatureVerifier


def test_compute_signature_is_deterministic(verifier):
    first = verifier.compute_signature("order_ABC", "pay_XYZ")
    assert all(verifier.compute_signature("order_ABC", "pay_XYZ") == first for _ in range(5))


def test_compute_signature_matches_hmac_sha256(verifier, signer):
    assert verifier.compute_signature("order_ABC", "pay_XYZ") == signer("order_ABC", "pay_XYZ")
    # order|payment, not payment|order
    assert verifier.compute_signature("order_ABC", "pay_XYZ") != signer("pay_XYZ", "order_ABC")


def test_compute_signature_handles_unicode(verifier, signer):
    assert verifier.compute_signature("ordér_1", "pay_✓") == signer("ordér_1", "pay_✓")


@pytest.mark.parametrize(
    "order_id,payment_id",
    [("order_1", "pay_1"), ("order_IluGWxBm9U8zJ8", "pay_IluH4p3fQyVWUf"), ("", "")],
)
def test_verify_accepts_exact_signature(verifier, order_id, payment_id):
    sig = verifier.compute_signature(order_id, payment_id)
    assert verifier.verify(sig, order_id, payment_id) is True


def test_verify_rejects_any_single_character_flip(verifier):
    sig = verifier.compute_signature("order_1", "pay_1")
    for i, ch in enumerate(sig):
        flipped = "0" if ch != "0" else "1"
        tampered = sig[:i] + flipped + sig[i + 1:]
        assert verifier.verify(tampered, "order_1", "pay_1") is False


def test_verify_rejects_other_identifiers(verifier):
    sig = verifier.compute_signature("order_1", "pay_1")
    assert verifier.verify(sig, "order_1", "pay_2") is False
    assert verifier.verify(sig, "order_2", "pay_1") is False


def test_verify_rejects_missing_or_uppercased_signature(verifier):
    sig = verifier.compute_signature("order_1", "pay_1")
    assert verifier.verify(None, "order_1", "pay_1") is False
    assert verifier.verify("", "order_1", "pay_1") is False
    # string equality semantics: hex case matters
    assert verifier.verify(sig.upper(), "order_1", "pay_1") is False


def test_verify_rejects_non_ascii_claim(verifier):
    assert verifier.verify("é" * 64, "order_1", "pay_1") is False


def test_signature_depends_on_secret(signer):
    a = SignatureVerifier("secret-a")
    b = SignatureVerifier("secret-b")
    sig = a.compute_signature("order_1", "pay_1")
    assert sig == signer("order_1", "pay_1", secret="secret-a")
    assert b.verify(sig, "order_1", "pay_1") is False


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_fails_closed(secret, signer):
    v = SignatureVerifier(secret)
    assert v.configured is False
    # even a signature made with an empty key is refused
    forged = signer("order_1", "pay_1", secret="")
    assert v.verify(forged, "order_1", "pay_1") is False
    with pytest.raises(SignatureConfigurationError):
        v.compute_signature("order_1", "pay_1")
