"""Habit suggestion engine - proposes likely next expenses from history"""

from datetime import datetime, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Tuple

from expense_capture.domain.models import EXPENSE, ExpenseRecord, Habit, Suggestion
from expense_capture.utils.date_utils import weekday_index

# Hour assumed for records without a creation timestamp
DEFAULT_HOUR = 12

FREQUENCY_SATURATION = 5
HOUR_WINDOW = 2
MIN_SCORE = 0.4
MAX_SUGGESTIONS = 3


def hour_on_clock(timestamp: datetime, tz: Optional[tzinfo]) -> int:
    """
    Hour of `timestamp` on the clock of `tz`.

    Naive timestamps are taken as already on that clock. Aware ones are
    converted; a `tz` of None means the local clock.
    """
    if timestamp.tzinfo is None:
        return timestamp.hour
    return timestamp.astimezone(tz).hour


def build_habits(history: Iterable[ExpenseRecord], tz: Optional[tzinfo] = None) -> List[Habit]:
    """
    Group expense records by (category, merchant).

    Record hours are read on the clock of `tz` so they compare with the
    current hour of the same zone.

    Income is ignored. The merchant falls back to the record title; records
    with neither, or without an amount, cannot be suggested and are skipped.
    """
    habits: Dict[Tuple[str, str], Habit] = {}

    for record in history:
        if record.type != EXPENSE:
            continue

        merchant = record.merchant or record.title
        if not merchant or record.amount is None:
            continue

        key = (record.category, merchant)
        if key not in habits:
            habits[key] = Habit(category=record.category, merchant=merchant)

        habit = habits[key]
        habit.occurrence_count += 1
        habit.observed_hours.append(hour_on_clock(record.created_at, tz) if record.created_at else DEFAULT_HOUR)
        habit.observed_days.append(weekday_index(record.date))
        habit.amounts.append(Decimal(str(record.amount)))

    return list(habits.values())


def circular_hour_distance(a: int, b: int) -> int:
    diff = abs(a - b)
    return min(diff, 24 - diff)


def frequency_score(habit: Habit) -> float:
    """Saturates at 1.0 from 5 occurrences on"""
    return min(habit.occurrence_count / FREQUENCY_SATURATION, 1.0)


def hour_proximity_score(habit: Habit, current_hour: int) -> float:
    """
    Average triangular weight of the habit's hours around `current_hour`.

    An hour d <= 2 away weighs 1 - d/3 (1.0, 0.67, 0.33); anything further
    weighs 0. The sum is divided by the occurrence count.
    """
    total = 0.0
    for hour in habit.observed_hours:
        distance = circular_hour_distance(hour, current_hour)
        if distance <= HOUR_WINDOW:
            total += 1 - distance / 3
    return total / habit.occurrence_count


def suggested_amount(habit: Habit) -> int:
    """Mean amount rounded half-up to a whole currency unit"""
    mean = sum(habit.amounts, Decimal(0)) / len(habit.amounts)
    return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def score_habit(habit: Habit, now: datetime) -> Suggestion:
    """
    Score a habit against the current time.

    Weights:
    - 40%: frequency (how often it happens)
    - 60%: hour proximity (whether it usually happens around now)
    """
    frequency = frequency_score(habit)
    proximity = hour_proximity_score(habit, now.hour)

    return Suggestion(
        category=habit.category,
        merchant=habit.merchant,
        suggested_amount=suggested_amount(habit),
        message=f"You usually spend on {habit.category} at this time.",
        score=(0.4 * frequency) + (0.6 * proximity),
        frequency_score=frequency,
        hour_proximity_score=proximity,
        occurrence_count=habit.occurrence_count,
    )


def get_suggestions(
    history: Iterable[ExpenseRecord],
    now: Optional[datetime] = None,
    limit: int = MAX_SUGGESTIONS,
) -> List[Suggestion]:
    """
    Main entry point: rank habits for the current time.

    Only habits scoring above 0.4 are returned, best first, at most `limit`.
    Order among equal scores is not guaranteed. `history` is only read.
    """
    if now is None:
        now = datetime.now().astimezone()

    scored = [score_habit(habit, now) for habit in build_habits(history, now.tzinfo)]
    strong = [s for s in scored if s.score > MIN_SCORE]
    strong.sort(key=lambda s: s.score, reverse=True)

    return strong[:limit]
