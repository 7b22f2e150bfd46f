from datetime import datetime
from typing import Optional

import attrs

from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.payment_status import PaymentStatus


@attrs.frozen
class PaymentTransaction:
    transaction_id: str
    amount: int
    method: PaymentMethod
    paid_at: datetime
    status: PaymentStatus = PaymentStatus.COMPLETED
    note: str = ''


@attrs.frozen
class Payment:
    """
    Payment ledger of one booking.

    remaining_amount always equals total - paid_amount, and deposit_paid is a latch:
    once the paid amount reaches the deposit it stays True.
    """

    deposit_required: int
    remaining_amount: int
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    status: PaymentStatus = PaymentStatus.PENDING
    paid_amount: int = 0
    deposit_paid: bool = False
    deposit_paid_at: Optional[datetime] = None
    transactions: tuple[PaymentTransaction, ...] = ()

    @classmethod
    def open(cls, *, total: int, deposit_required: int, method: PaymentMethod) -> 'Payment':
        return cls(deposit_required=deposit_required, remaining_amount=total, method=method)

    @property
    def last_transaction(self) -> Optional[PaymentTransaction]:
        return self.transactions[-1] if self.transactions else None

    def record(self, transaction: PaymentTransaction, *, total: int) -> 'Payment':
        paid_amount = self.paid_amount + transaction.amount
        remaining_amount = total - paid_amount

        deposit_paid = self.deposit_paid or paid_amount >= self.deposit_required
        deposit_paid_at = self.deposit_paid_at
        if deposit_paid and not self.deposit_paid:
            deposit_paid_at = transaction.paid_at

        if remaining_amount <= 0:
            status = PaymentStatus.COMPLETED
        elif paid_amount > 0:
            status = PaymentStatus.PARTIAL
        else:
            status = self.status

        return attrs.evolve(
            self,
            paid_amount=paid_amount,
            remaining_amount=remaining_amount,
            deposit_paid=deposit_paid,
            deposit_paid_at=deposit_paid_at,
            status=status,
            transactions=(*self.transactions, transaction),
        )
