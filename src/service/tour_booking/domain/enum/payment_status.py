from enum import StrEnum


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    PARTIAL = 'partial'
    COMPLETED = 'completed'
    REFUNDED = 'refunded'
    FAILED = 'failed'
