# installments/models/__init__.py

from .check_instrument import CheckInstrument
from .installment_payment import InstallmentPayment
from .installment_sale import InstallmentSale
from .installment_transaction import InstallmentTransaction

__all__ = [
    "InstallmentSale",
    "InstallmentPayment",
    "InstallmentTransaction",
    "CheckInstrument",
]
