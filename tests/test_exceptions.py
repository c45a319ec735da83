import pytest

from core.exceptions import business_code_to_http_status
from shared.codes import BusinessCode
from shared.codes.payment_codes import PaymentCode


@pytest.mark.parametrize(
    "code, status",
    [
        (BusinessCode.PARAM_MISSING, 400),
        (BusinessCode.INVALID_COURSE, 400),
        (BusinessCode.NOT_FOUND, 404),
        (BusinessCode.CONFIGURATION_ERROR, 500),
        (BusinessCode.SERVICE_UNAVAILABLE, 503),
        (PaymentCode.ORDER_CREATION_FAILED, 500),
        (PaymentCode.STATUS_LOOKUP_FAILED, 500),
        (99999, 400),
    ],
)
def test_business_code_to_http_status(code, status):
    assert business_code_to_http_status(code) == status


def test_payment_codes_are_all_mapped_to_server_errors():
    assert {business_code_to_http_status(c) for c in PaymentCode} == {500}
