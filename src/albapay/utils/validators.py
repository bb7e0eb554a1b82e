import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

CLOCK_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')


class InvalidTimeError(ValueError):
    """Raised for clock strings that are not a valid H:mm / HH:mm time"""


def parse_clock_time(value: str) -> int:
    """Parse "H:mm" or "HH:mm" into minutes since midnight"""
    match = CLOCK_TIME_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeError(f"Invalid time {value!r}, expected HH:mm")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def format_clock_time(value: str) -> str:
    """Zero-padded "HH:mm" form of a valid clock string"""
    minutes = parse_clock_time(value)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_valid_clock_time(value: str) -> bool:
    """Check a clock string without raising"""
    try:
        parse_clock_time(value)
    except InvalidTimeError:
        return False
    return True


def parse_iso_date(value) -> date:
    """Accept a date, a datetime or a YYYY-MM-DD string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
        except ValueError:
            pass
    raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def to_decimal(value, default: Decimal = Decimal('0')) -> Decimal:
    """Coerce numbers and numeric strings to a finite Decimal; blanks become the default"""
    if value is None or value == '':
        return default
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid number {value!r}")
    if not result.is_finite():
        raise ValueError(f"Invalid number {value!r}, must be finite")
    return result


def parse_flag(value, default=None):
    """Read a JSON boolean, also accepting the strings "true"/"false"; None gives the default"""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
        return value.strip().lower() == 'true'
    raise ValueError(f"Invalid flag {value!r}, expected true or false")
