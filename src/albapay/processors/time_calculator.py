from decimal import Decimal

from albapay.models.workplace import BreakPolicy, BreakType
from albapay.utils.money import round_half_up
from albapay.utils.validators import InvalidTimeError, parse_clock_time

MINUTES_PER_DAY = 24 * 60

# Night window 22:00-06:00 laid out on a two-day minute axis
NIGHT_WINDOWS = (
    (0, 6 * 60),
    (22 * 60, MINUTES_PER_DAY + 6 * 60),
    (MINUTES_PER_DAY + 22 * 60, 2 * MINUTES_PER_DAY),
)

STANDARD_BLOCK_HOURS = 4
STANDARD_BREAK_MINUTES = 30

__all__ = [
    'InvalidTimeError',
    'parse_clock_time',
    'work_minutes',
    'night_minutes',
    'break_minutes',
    'adjust_for_break',
    'effective_minutes',
]


def _span(start_time: str, end_time: str):
    start = parse_clock_time(start_time)
    end = parse_clock_time(end_time)
    # Crossing midnight
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def work_minutes(start_time: str, end_time: str) -> int:
    """Elapsed minutes from start to end, wrapping past midnight"""
    start, end = _span(start_time, end_time)
    return end - start


def night_minutes(start_time: str, end_time: str) -> int:
    """Minutes of the shift falling between 22:00 and 06:00"""
    start, end = _span(start_time, end_time)
    total = 0
    for window_start, window_end in NIGHT_WINDOWS:
        overlap = min(end, window_end) - max(start, window_start)
        if overlap > 0:
            total += overlap
    return total


def _break_by_rule(total_minutes: int, every_hours, minutes_per_block: int) -> int:
    block_minutes = int(Decimal(str(every_hours)) * 60)
    if not block_minutes or not minutes_per_block or total_minutes < block_minutes:
        return 0
    blocks = total_minutes // block_minutes
    return min(total_minutes, blocks * minutes_per_block)


def break_minutes(total_minutes: int, policy: BreakPolicy) -> int:
    """Unpaid break minutes for a shift of ``total_minutes``"""
    if not total_minutes or policy is None or policy.kind is BreakType.NONE:
        return 0

    if policy.kind is BreakType.STANDARD:
        return _break_by_rule(total_minutes, STANDARD_BLOCK_HOURS, STANDARD_BREAK_MINUTES)

    if policy.kind is BreakType.CUSTOM:
        return _break_by_rule(total_minutes, policy.every_hours or 0, policy.minutes_per_block or 0)

    return 0


def adjust_for_break(target_minutes: int, total_minutes: int, break_mins: int) -> int:
    """Shrink a sub-span of the shift by the share that breaks take out of the whole.

    Keeps break time from being counted again inside the night premium.
    """
    if not total_minutes or not break_mins:
        return target_minutes
    effective = max(0, total_minutes - break_mins)
    return max(0, round_half_up(Decimal(target_minutes) * effective / total_minutes))


def effective_minutes(total_minutes: int, break_mins: int) -> int:
    return max(0, total_minutes - break_mins)
