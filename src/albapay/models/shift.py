from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from albapay.utils.validators import format_clock_time, parse_flag, parse_iso_date

SHIFT_SOURCES = ('manual', 'image', 'calendar')

SHIFT_KEY_ALIASES = {
    'startTime': 'start_time',
    'endTime': 'end_time',
    'isHoliday': 'is_holiday',
    'workplaceId': 'workplace_id',
}


def normalize_keys(data: dict) -> dict:
    """Map camelCase shift keys onto their snake_case names"""
    return {SHIFT_KEY_ALIASES.get(key, key): value for key, value in data.items()}


def _pick(data: dict, *keys, default=None):
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class Shift:
    """One recorded work period at one workplace on one date"""
    date: date
    start_time: str
    end_time: str
    memo: str = ""
    is_holiday: Optional[bool] = None
    workplace_id: Optional[str] = None
    id: Optional[int] = None
    source: str = 'manual'

    def __post_init__(self):
        # stored zero-padded so string order matches clock order
        object.__setattr__(self, 'start_time', format_clock_time(self.start_time))
        object.__setattr__(self, 'end_time', format_clock_time(self.end_time))
        if self.source not in SHIFT_SOURCES:
            raise ValueError(f"Unknown shift source {self.source!r}")

    @classmethod
    def from_dict(cls, data: dict) -> "Shift":
        """Build from stored/API JSON (camelCase or snake_case keys)"""
        return cls(
            date=parse_iso_date(data.get('date')),
            start_time=_pick(data, 'start_time', 'startTime'),
            end_time=_pick(data, 'end_time', 'endTime'),
            memo=data.get('memo') or "",
            is_holiday=parse_flag(_pick(data, 'is_holiday', 'isHoliday')),
            workplace_id=_pick(data, 'workplace_id', 'workplaceId'),
            id=data.get('id'),
            source=data.get('source') or 'manual',
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'workplace_id': self.workplace_id,
            'date': self.date.isoformat(),
            'start_time': self.start_time,
            'end_time': self.end_time,
            'memo': self.memo,
            'is_holiday': self.is_holiday,
            'source': self.source,
        }

    def with_holiday(self, is_holiday: bool) -> "Shift":
        return replace(self, is_holiday=is_holiday)

    def __str__(self):
        return f"Shift({self.date.isoformat()} {self.start_time}-{self.end_time})"


@dataclass(frozen=True)
class ShiftCandidate:
    """Shift proposed by schedule extraction, pending human review"""
    date: str
    start_time: str
    end_time: str
    memo: str = ""
    uncertain: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "ShiftCandidate":
        return cls(
            date=str(data.get('date') or ''),
            start_time=str(_pick(data, 'start_time', 'startTime', default='')),
            end_time=str(_pick(data, 'end_time', 'endTime', default='')),
            memo=data.get('memo') or "",
            uncertain=parse_flag(data.get('uncertain'), default=False),
        )
