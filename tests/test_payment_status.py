from decimal import Decimal

import pytest

from godam.models import PaymentStatus
from godam.utils.payment_status import classify_payment_status


@pytest.mark.parametrize(
    "total, paid, expected",
    [
        (1000, 0, PaymentStatus.pending),
        (0, 0, PaymentStatus.pending),
        (1000, 400, PaymentStatus.partially_paid),
        (1000, 1000, PaymentStatus.paid),
        (1000, 1200, PaymentStatus.paid),
        (0, 50, PaymentStatus.paid),
        (None, None, PaymentStatus.pending),
        (Decimal("99.99"), Decimal("99.98"), PaymentStatus.partially_paid),
    ],
)
def test_classify_payment_status(total, paid, expected):
    assert classify_payment_status(total, paid) == expected
