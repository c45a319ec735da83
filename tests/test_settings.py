from core.settings import PaymentSettings


def test_nested_gateway_settings_read_from_env(monkeypatch):
    monkeypatch.setenv("PAYMENT__CALLBACK__SUCCESS_URL", "https://example.com/payment-success")
    monkeypatch.setenv("PAYMENT__CALLBACK__FAILURE_URL", "https://example.com/payment-failed")
    monkeypatch.setenv("PAYMENT__TIMEOUTS__TOTAL", "3")
    monkeypatch.setenv("PAYMENT__RETRY__MAX", "0")
    monkeypatch.setenv("PAYMENT__API_BASE", "https://gateway.test/v1")

    cfg = PaymentSettings(_env_file=None)

    assert cfg.callback.success_url == "https://example.com/payment-success"
    assert cfg.callback.failure_url == "https://example.com/payment-failed"
    assert cfg.timeouts.total == 3.0
    assert cfg.timeouts.connect == 3.0
    assert cfg.retry.max == 0
    assert cfg.api_base == "https://gateway.test/v1"


def test_flat_razorpay_credentials(monkeypatch):
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_live_id")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "live_secret")

    cfg = PaymentSettings(_env_file=None)

    assert cfg.key_id == "rzp_live_id"
    assert cfg.key_secret == "live_secret"


def test_defaults_without_env(monkeypatch):
    for name in ("PAYMENT__CALLBACK__SUCCESS_URL", "PAYMENT__TIMEOUTS__TOTAL", "PAYMENT__CURRENCY"):
        monkeypatch.delenv(name, raising=False)

    cfg = PaymentSettings(_env_file=None)

    assert cfg.currency == "INR"
    assert cfg.timeouts.total == 10.0
    assert cfg.callback.success_url == "/payment-success"
