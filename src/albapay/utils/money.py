from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from albapay.utils.validators import to_decimal


def floor_won(amount) -> int:
    """Truncate toward negative infinity to whole won"""
    return int(to_decimal(amount).to_integral_value(rounding=ROUND_FLOOR))


def round_half_up(amount) -> int:
    return int(to_decimal(amount).to_integral_value(rounding=ROUND_HALF_UP))


def percent_of(amount, rate_percent) -> int:
    """floor(amount * rate / 100)"""
    return floor_won(to_decimal(amount) * to_decimal(rate_percent) / Decimal('100'))
