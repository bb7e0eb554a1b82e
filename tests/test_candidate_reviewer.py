from datetime import date

import pytest

from albapay.models import ShiftCandidate
from albapay.processors.candidate_reviewer import confirm_candidates, normalize_candidate_date, review_candidate


def candidates():
    return [
        ShiftCandidate.from_dict({'date': '2024-03-04', 'startTime': '09:00', 'endTime': '15:00', 'memo': 'open'}),
        ShiftCandidate.from_dict({'date': '2024-03-05', 'startTime': '18:00', 'endTime': '23:30', 'uncertain': True}),
        ShiftCandidate.from_dict({'date': '2024-03-06', 'startTime': '9시', 'endTime': '15:00'}),
        ShiftCandidate.from_dict({'date': '3월 7일', 'startTime': '09:00', 'endTime': '15:00'}),
    ]


def test_confirm_candidates():
    accepted, rejected = confirm_candidates(candidates(), 'w1')

    assert len(accepted) == 1
    shift = accepted[0]
    assert shift.date == date(2024, 3, 4)
    assert shift.workplace_id == 'w1'
    assert shift.source == 'image'
    assert shift.memo == 'open'
    assert shift.is_holiday is None

    reasons = [reason for _, reason in rejected]
    assert reasons[0] == "marked uncertain, needs review"
    assert reasons[1].startswith("invalid start time")
    assert reasons[2].startswith("invalid date")


def test_accept_uncertain():
    accepted, rejected = confirm_candidates(candidates(), 'w1', accept_uncertain=True)
    assert [s.date for s in accepted] == [date(2024, 3, 4), date(2024, 3, 5)]
    assert len(rejected) == 2


def test_zero_length_candidate_rejected():
    candidate = ShiftCandidate(date='2024-03-04', start_time='09:00', end_time='09:00')
    assert review_candidate(candidate) == "start and end time are equal"


@pytest.mark.parametrize("value, expected", [
    ('2024-01-05', date(2024, 1, 5)),
    ('2024/1/5', date(2024, 1, 5)),
    ('2024.01.05', date(2024, 1, 5)),
    ('24-01-05', date(2024, 1, 5)),
    ('yyyy-01-05', date(2025, 1, 5)),
    ('YYYY/1/5', date(2025, 1, 5)),
    ('1/5', date(2025, 1, 5)),
    (' 12.31 ', date(2025, 12, 31)),
])
def test_extracted_date_shapes(value, expected):
    assert normalize_candidate_date(value, today=date(2025, 6, 1)) == expected


@pytest.mark.parametrize("value", ['3월 7일', '2024-02-30', '13/1', '2024-1', '', None])
def test_unreadable_dates(value):
    with pytest.raises(ValueError):
        normalize_candidate_date(value, today=date(2025, 6, 1))


def test_confirm_normalizes_dates():
    batch = [
        ShiftCandidate(date='1/5', start_time='9:00', end_time='15:00'),
        ShiftCandidate(date='24.01.06', start_time='09:00', end_time='15:00'),
    ]
    accepted, rejected = confirm_candidates(batch, 'w1', today=date(2024, 3, 1))

    assert rejected == []
    assert [s.date for s in accepted] == [date(2024, 1, 5), date(2024, 1, 6)]
    assert accepted[0].start_time == '09:00'


def test_padded_and_unpadded_equal_times_rejected():
    candidate = ShiftCandidate(date='2024-03-04', start_time='9:00', end_time='09:00')
    assert review_candidate(candidate) == "start and end time are equal"
