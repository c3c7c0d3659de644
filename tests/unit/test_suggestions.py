"""Unit tests for habit-based suggestions"""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from expense_capture.domain.models import ExpenseRecord, Habit
from expense_capture.domain.suggestions import (
    build_habits,
    circular_hour_distance,
    frequency_score,
    get_suggestions,
    hour_on_clock,
    hour_proximity_score,
    suggested_amount,
)

IST = timezone(timedelta(hours=5, minutes=30))


def _records(merchant, category, count, hour=None, amount=100, start=datetime(2026, 1, 1)):
    """`count` expenses on consecutive days, at `hour` when given"""
    return [
        ExpenseRecord(
            amount=Decimal(amount),
            category=category,
            type="expense",
            date=(start + timedelta(days=i)).date(),
            merchant=merchant,
            created_at=(start + timedelta(days=i)).replace(hour=hour) if hour is not None else None,
        )
        for i in range(count)
    ]


def test_get_suggestions_evening_habit_ranked_first(evening_swiggy_history):
    """Six Swiggy orders near 8pm, queried at 8pm"""
    suggestions = get_suggestions(evening_swiggy_history, now=datetime(2026, 2, 1, 20, 10))

    top = suggestions[0]
    assert top.merchant == "Swiggy"
    assert top.category == "Food"
    assert top.frequency_score == 1.0
    assert top.hour_proximity_score == pytest.approx(1.0)
    assert top.score == pytest.approx(1.0)
    assert top.suggested_amount == 350
    assert top.occurrence_count == 6
    assert top.message == "You usually spend on Food at this time."


def test_get_suggestions_ignores_income(evening_swiggy_history):
    suggestions = get_suggestions(evening_swiggy_history, now=datetime(2026, 2, 1, 20, 0))
    assert "Employer" not in [s.merchant for s in suggestions]


def test_get_suggestions_filters_weak_habits(evening_swiggy_history):
    """The single morning Uber ride scores 0.2 * 0.4 + 0.6 = 0.68 at 8am but 0.08 at 8pm"""
    evening = get_suggestions(evening_swiggy_history, now=datetime(2026, 2, 1, 20, 0))
    assert [s.merchant for s in evening] == ["Swiggy"]

    morning = get_suggestions(evening_swiggy_history, now=datetime(2026, 2, 1, 8, 0))
    assert [s.merchant for s in morning] == ["Uber"]
    assert morning[0].score == pytest.approx(0.68)
    assert all(s.score > 0.4 for s in morning)


def test_get_suggestions_threshold_is_exclusive():
    """Frequent habit far from now scores exactly 0.4 and is dropped"""
    history = _records("Netflix", "Entertainment", 5)  # no timestamp -> hour 12
    assert get_suggestions(history, now=datetime(2026, 2, 1, 18, 0)) == []


def test_get_suggestions_default_hour_is_midday():
    history = _records("Canteen", "Food", 5)
    suggestions = get_suggestions(history, now=datetime(2026, 2, 1, 12, 45))

    assert len(suggestions) == 1
    assert suggestions[0].hour_proximity_score == pytest.approx(1.0)


def test_get_suggestions_caps_at_three():
    history = []
    for merchant in ["Swiggy", "Zomato", "Dominos", "KFC", "Cafe"]:
        history.extend(_records(merchant, "Food", 5, hour=13))

    suggestions = get_suggestions(history, now=datetime(2026, 2, 1, 13, 0))

    assert len(suggestions) == 3
    assert all(s.score == pytest.approx(1.0) for s in suggestions)


def test_get_suggestions_sorted_by_score():
    history = (
        _records("Metro", "Transport", 5, hour=9)
        + _records("Starbucks", "Food", 2, hour=9)
        + _records("Chai Point", "Food", 5, hour=10)
    )
    suggestions = get_suggestions(history, now=datetime(2026, 2, 1, 9, 0))

    scores = [s.score for s in suggestions]
    assert scores == sorted(scores, reverse=True)
    assert suggestions[0].merchant == "Metro"
    assert {s.merchant for s in suggestions} == {"Metro", "Starbucks", "Chai Point"}


def test_get_suggestions_empty_history():
    assert get_suggestions([], now=datetime(2026, 2, 1, 9, 0)) == []


def test_get_suggestions_does_not_modify_history(evening_swiggy_history):
    snapshot = list(evening_swiggy_history)
    now = datetime(2026, 2, 1, 20, 0)

    first = get_suggestions(evening_swiggy_history, now=now)
    second = get_suggestions(evening_swiggy_history, now=now)

    assert evening_swiggy_history == snapshot
    assert first == second


def test_build_habits_groups_by_category_and_merchant():
    history = _records("Amazon", "Shopping", 2) + _records("Amazon", "Entertainment", 1)
    habits = build_habits(history)

    counts = {(h.category, h.merchant): h.occurrence_count for h in habits}
    assert counts == {("Shopping", "Amazon"): 2, ("Entertainment", "Amazon"): 1}


def test_build_habits_title_fallback_and_skips():
    history = [
        ExpenseRecord(amount=Decimal(40), category="Food", type="expense", date=date(2024, 3, 3), title="Tea"),
        ExpenseRecord(amount=Decimal(40), category="Food", type="expense", date=date(2024, 3, 4)),
        ExpenseRecord(amount=None, category="Food", type="expense", date=date(2024, 3, 4), merchant="Tea"),
    ]
    habits = build_habits(history)

    assert len(habits) == 1
    assert habits[0].merchant == "Tea"
    assert habits[0].observed_hours == [12]
    assert habits[0].observed_days == [0]  # 2024-03-03 is a Sunday


def test_frequency_score_saturates():
    assert frequency_score(Habit("Food", "Swiggy", occurrence_count=1)) == pytest.approx(0.2)
    assert frequency_score(Habit("Food", "Swiggy", occurrence_count=5)) == 1.0
    assert frequency_score(Habit("Food", "Swiggy", occurrence_count=50)) == 1.0


def test_circular_hour_distance_wraps_midnight():
    assert circular_hour_distance(23, 1) == 2
    assert circular_hour_distance(1, 23) == 2
    assert circular_hour_distance(0, 12) == 12
    assert circular_hour_distance(20, 20) == 0


def test_hour_proximity_score_triangular_weights():
    habit = Habit("Food", "Swiggy", occurrence_count=4, observed_hours=[20, 21, 22, 3])
    # (1 + 2/3 + 1/3 + 0) / 4
    assert hour_proximity_score(habit, 20) == pytest.approx(0.5)


def test_hour_proximity_score_across_midnight():
    habit = Habit("Food", "Late Night Diner", occurrence_count=2, observed_hours=[23, 0])
    # distance 2 and 1 from 01:00
    assert hour_proximity_score(habit, 1) == pytest.approx((1 / 3 + 2 / 3) / 2)


def test_suggested_amount_rounds_half_up():
    habit = Habit("Food", "Swiggy", occurrence_count=2, amounts=[Decimal(100), Decimal(101)])
    assert suggested_amount(habit) == 101

    habit = Habit("Food", "Swiggy", occurrence_count=3, amounts=[Decimal("99.40"), Decimal(100), Decimal(100)])
    assert suggested_amount(habit) == 100


def test_get_suggestions_converts_utc_history_to_caller_clock():
    """Orders stored as 14:30Z are 20:00 in India and match an 8:30pm IST query"""
    history = [
        ExpenseRecord(
            amount=Decimal(300),
            category="Food",
            type="expense",
            date=date(2026, 1, day),
            merchant="Swiggy",
            created_at=datetime(2026, 1, day, 14, 30, tzinfo=timezone.utc),
        )
        for day in range(1, 7)
    ]

    suggestions = get_suggestions(history, now=datetime(2026, 2, 1, 20, 30, tzinfo=IST))

    assert [s.merchant for s in suggestions] == ["Swiggy"]
    assert suggestions[0].hour_proximity_score == pytest.approx(1.0)
    assert suggestions[0].score == pytest.approx(1.0)


def test_get_suggestions_default_now_is_local_clock():
    """Aware history is read on the local clock when no time is passed"""
    local_now = datetime.now().astimezone()
    history = _records("Swiggy", "Food", 5, hour=local_now.hour, start=local_now.replace(tzinfo=None))
    history = [
        ExpenseRecord(
            amount=r.amount,
            category=r.category,
            type=r.type,
            date=r.date,
            merchant=r.merchant,
            created_at=r.created_at.replace(tzinfo=local_now.tzinfo).astimezone(timezone.utc),
        )
        for r in history
    ]

    suggestions = get_suggestions(history)

    assert [s.merchant for s in suggestions] == ["Swiggy"]
    assert suggestions[0].hour_proximity_score == pytest.approx(1.0)


def test_hour_on_clock():
    stored = datetime(2026, 1, 1, 14, 30, tzinfo=timezone.utc)
    assert hour_on_clock(stored, IST) == 20
    assert hour_on_clock(stored, timezone.utc) == 14
    assert hour_on_clock(datetime(2026, 1, 1, 9, 0), IST) == 9  # naive stays as written
