from datetime import date


def format_won(amount: int) -> str:
    """Format whole-won amount"""
    return f"{amount:,}원"


def format_minutes(minutes: int) -> str:
    """Format minutes as H:MM"""
    return f"{minutes // 60}:{minutes % 60:02d}"


def format_range(start: date, end: date) -> str:
    return f"{start.isoformat()} ~ {end.isoformat()}"
