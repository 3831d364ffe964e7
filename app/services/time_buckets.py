"""
Time-Bucket Aggregator

Groups timestamped events into calendar buckets inside a trailing window and
counts them. Three granularities are supported:

- Month:    "Jan 2025", trailing N calendar months, chronological order
- Week:     "Week k", k = weeks ago (1 = the 7 days ending now), k <= N
- Semester: "Spring 2025" (Jan-Jun) / "Fall 2025" (Jul-Dec), trailing N years

Only buckets holding at least one event are emitted; nothing is zero-filled
or interpolated.

NOTE on weeks: an event's bucket is derived from the difference in whole
days-since-epoch between "now" and the event, not from a calendar grid. As
"now" advances an unchanged event can move from "Week 1" to "Week 2", and two
events on the same calendar week can land in different buckets.
"""

import calendar
from collections import Counter
from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple, TypeVar

T = TypeVar("T")

EPOCH = date(1970, 1, 1)
DAYS_PER_WEEK = 7


class Granularity(str, Enum):
    month = "month"
    week = "week"
    semester = "semester"


class Bucket(NamedTuple):
    label: str
    count: int


# ============================================================
# CALENDAR HELPERS
# ============================================================

def subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day (Mar 31 - 1 -> Feb 28/29)."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def subtract_years(moment: datetime, years: int) -> datetime:
    return subtract_months(moment, years * 12)


def day_index(moment: datetime) -> int:
    """Whole days since the Unix epoch."""
    return (moment.date() - EPOCH).days


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_abbr[month]} {year}"


def semester_of(moment: datetime) -> Tuple[int, int]:
    """(year, 0 for Spring / 1 for Fall). Jan-Jun is Spring, Jul-Dec is Fall."""
    return moment.year, 0 if moment.month <= 6 else 1


def semester_label(year: int, half: int) -> str:
    return f"{'Spring' if half == 0 else 'Fall'} {year}"


def week_number(moment: datetime, now: datetime) -> int:
    """Weeks-ago index of an event; 1 covers the 7 days ending today."""
    return (day_index(now) - day_index(moment)) // DAYS_PER_WEEK + 1


# ============================================================
# BUCKETING
# ============================================================

def bucket_by_month(
    timestamps: Iterable[datetime],
    now: datetime,
    months: int = 12,
) -> List[Bucket]:
    """Count events per calendar month over the trailing ``months`` window."""
    cutoff = subtract_months(now, months)
    counts = Counter(
        (ts.year, ts.month) for ts in timestamps if ts >= cutoff
    )
    return [
        Bucket(month_label(year, month), counts[(year, month)])
        for year, month in sorted(counts)
    ]


def bucket_by_week(
    timestamps: Iterable[datetime],
    now: datetime,
    weeks: int = 8,
) -> List[Bucket]:
    """Count events per weeks-ago bucket, Week 1 first."""
    counts = Counter()
    for ts in timestamps:
        k = week_number(ts, now)
        if ts <= now and 1 <= k <= weeks:
            counts[k] += 1
    return [Bucket(f"Week {k}", counts[k]) for k in sorted(counts)]


def bucket_by_semester(
    timestamps: Iterable[datetime],
    now: datetime,
    years: int = 2,
) -> List[Bucket]:
    """Count events per academic semester over the trailing ``years`` window."""
    cutoff = subtract_years(now, years)
    counts = Counter(semester_of(ts) for ts in timestamps if ts >= cutoff)
    return [
        Bucket(semester_label(year, half), counts[(year, half)])
        for year, half in sorted(counts)
    ]


def bucket(
    events: Iterable[T],
    granularity: Granularity,
    now: datetime,
    window: Optional[int] = None,
    timestamp: Callable[[T], datetime] = lambda event: event,
) -> List[Bucket]:
    """
    Group events into buckets of the given granularity.

    Args:
        events: records (or bare datetimes) to count
        granularity: month, week or semester
        now: reference point of the trailing window
        window: window length in the granularity's unit
            (months, weeks or years); defaults to 12 / 8 / 2
        timestamp: extracts the datetime from an event

    Returns:
        Ordered list of (label, count) buckets
    """
    stamps = [timestamp(event) for event in events]
    if granularity == Granularity.month:
        return bucket_by_month(stamps, now, window or 12)
    if granularity == Granularity.week:
        return bucket_by_week(stamps, now, window or 8)
    if granularity == Granularity.semester:
        return bucket_by_semester(stamps, now, window or 2)
    raise ValueError(f"Unsupported granularity: {granularity}")
