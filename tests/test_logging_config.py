from core.logging_config import redact_secrets


def test_redact_secrets_masks_credential_keys():
    event = {"event": "startup", "key_secret": "s3cr3t", "idToken": "tok", "order_id": "order_1"}
    out = redact_secrets(None, "info", event)
    assert out["key_secret"] == "***"
    assert out["idToken"] == "***"
    assert out["order_id"] == "order_1"


def test_redact_secrets_leaves_empty_values():
    assert redact_secrets(None, "info", {"event": "x", "secret": ""})["secret"] == ""
