import logging
import re
from datetime import date
from typing import Iterable, List, Optional, Tuple

from albapay.models.shift import Shift, ShiftCandidate
from albapay.utils.validators import is_valid_clock_time, parse_clock_time, parse_iso_date

logger = logging.getLogger(__name__)

# Date shapes produced by schedule extraction; a year-less date takes the current year
PLACEHOLDER_YEAR_DATE = re.compile(r'^yyyy[-/.](\d{1,2})[-/.](\d{1,2})$', re.IGNORECASE)
FULL_DATE = re.compile(r'^(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})$')
SHORT_YEAR_DATE = re.compile(r'^(\d{2})[-/.](\d{1,2})[-/.](\d{1,2})$')
MONTH_DAY_DATE = re.compile(r'^(\d{1,2})[-/.](\d{1,2})$')


def normalize_candidate_date(value, today: Optional[date] = None) -> date:
    """Read an extracted schedule date.

    Accepts ``YYYY-MM-DD`` with ``-``, ``/`` or ``.`` separators, the
    ``yyyy-MM-DD`` placeholder and bare ``M/D`` (both in the current year),
    and two-digit years (``24-01-05`` is 2024). Raises ``ValueError`` otherwise.
    """
    if isinstance(value, date):
        return parse_iso_date(value)
    if not isinstance(value, str):
        raise ValueError(f"Invalid date {value!r}")

    text = value.strip()
    year = (today or date.today()).year

    match = PLACEHOLDER_YEAR_DATE.match(text)
    if match:
        return date(year, int(match.group(1)), int(match.group(2)))
    match = FULL_DATE.match(text)
    if match:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    match = SHORT_YEAR_DATE.match(text)
    if match:
        return date(2000 + int(match.group(1)), int(match.group(2)), int(match.group(3)))
    match = MONTH_DAY_DATE.match(text)
    if match:
        return date(year, int(match.group(1)), int(match.group(2)))

    raise ValueError(f"Invalid date {value!r}")


def review_candidate(candidate: ShiftCandidate, accept_uncertain: bool = False,
                     today: Optional[date] = None) -> str:
    """Reason the candidate cannot become a shift, or "" when it can"""
    try:
        normalize_candidate_date(candidate.date, today)
    except ValueError:
        return f"invalid date {candidate.date!r}"
    if not is_valid_clock_time(candidate.start_time):
        return f"invalid start time {candidate.start_time!r}"
    if not is_valid_clock_time(candidate.end_time):
        return f"invalid end time {candidate.end_time!r}"
    if parse_clock_time(candidate.start_time) == parse_clock_time(candidate.end_time):
        return "start and end time are equal"
    if candidate.uncertain and not accept_uncertain:
        return "marked uncertain, needs review"
    return ""


def confirm_candidates(candidates: Iterable[ShiftCandidate], workplace_id: str,
                       accept_uncertain: bool = False,
                       today: Optional[date] = None) -> Tuple[List[Shift], List[Tuple[ShiftCandidate, str]]]:
    """Turn reviewed extraction candidates into shifts.

    Returns the accepted shifts and the rejected candidates with a reason.
    """
    accepted = []
    rejected = []

    for candidate in candidates:
        reason = review_candidate(candidate, accept_uncertain, today)
        if reason:
            rejected.append((candidate, reason))
            continue

        accepted.append(Shift(
            date=normalize_candidate_date(candidate.date, today),
            start_time=candidate.start_time,
            end_time=candidate.end_time,
            memo=candidate.memo,
            workplace_id=workplace_id,
            source='image',
        ))

    logger.info("Confirmed %d candidate shifts, rejected %d", len(accepted), len(rejected))
    return accepted, rejected
