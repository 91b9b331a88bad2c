from decimal import Decimal

from godam.models.maal_in import PaymentStatus


def classify_payment_status(total_amount, total_paid) -> PaymentStatus:
    """
    Nothing paid is pending even when the total is zero; otherwise paid once
    the cumulative payments reach the total, partially paid before that.
    """
    total_amount = Decimal(str(total_amount or 0))
    total_paid = Decimal(str(total_paid or 0))

    if total_paid <= 0:
        return PaymentStatus.pending
    if total_paid >= total_amount:
        return PaymentStatus.paid
    return PaymentStatus.partially_paid
