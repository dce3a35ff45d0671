"""
Booking Pricing

total = nights * nightly rate, where nights is the stay length in days
rounded up. A partial day is billed as a full night.
"""

from datetime import date
from decimal import Decimal

from shared.domain.value_objects import DateRange


def calculate_nights(check_in: date, check_out: date) -> int:
    return DateRange(check_in, check_out).nights


def calculate_total_price(check_in: date, check_out: date, nightly_rate) -> Decimal:
    """Price of a stay at the given nightly rate, quantized to cents."""
    rate = nightly_rate if isinstance(nightly_rate, Decimal) else Decimal(str(nightly_rate))
    total = rate * calculate_nights(check_in, check_out)
    return total.quantize(Decimal("0.01"))
