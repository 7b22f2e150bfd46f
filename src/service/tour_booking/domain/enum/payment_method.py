from enum import StrEnum


class PaymentMethod(StrEnum):
    CASH = 'cash'
    BANK_TRANSFER = 'bank_transfer'
    CREDIT_CARD = 'credit_card'
    E_WALLET = 'e_wallet'
