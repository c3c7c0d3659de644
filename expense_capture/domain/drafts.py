"""Expense drafts built from accepted candidates and suggestions"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from expense_capture.domain.exceptions import InvalidSelectionError
from expense_capture.domain.models import EXPENSE, ExpenseDraft, Suggestion, TransactionCandidate

SMS_TAGS = ["Auto-recorded", "SMS-Parse"]
SUGGESTION_TAGS = ["Auto-recorded", "Habit-Suggestion"]


def draft_from_candidate(candidate: TransactionCandidate, created_at: Optional[datetime] = None) -> ExpenseDraft:
    """Merchant becomes the expense title; the SMS date is kept"""
    return ExpenseDraft(
        id=str(uuid.uuid4()),
        title=candidate.merchant,
        amount=candidate.amount,
        category=candidate.category,
        date=candidate.date,
        type=candidate.direction,
        created_at=created_at or datetime.now(),
        account=candidate.account,
        tags=list(SMS_TAGS),
    )


def draft_from_suggestion(
    suggestion: Suggestion,
    today: Optional[date] = None,
    created_at: Optional[datetime] = None,
) -> ExpenseDraft:
    """A suggestion is always an expense dated on the day it is accepted"""
    return ExpenseDraft(
        id=str(uuid.uuid4()),
        title=suggestion.merchant,
        amount=Decimal(suggestion.suggested_amount),
        category=suggestion.category,
        date=today or date.today(),
        type=EXPENSE,
        created_at=created_at or datetime.now(),
        tags=list(SUGGESTION_TAGS),
    )


def select_candidates(
    candidates: Sequence[TransactionCandidate],
    selected: Optional[Sequence[int]] = None,
) -> List[TransactionCandidate]:
    """
    Pick the candidates the user ticked, by position in the parsed batch.

    All candidates are selected when `selected` is None. Duplicate indices
    are collapsed; order follows the parsed batch.

    Raises:
        InvalidSelectionError: if an index is outside the batch
    """
    if selected is None:
        return list(candidates)

    invalid = [idx for idx in selected if idx < 0 or idx >= len(candidates)]
    if invalid:
        raise InvalidSelectionError(f"No parsed transaction at index {invalid[0]} (found {len(candidates)})")

    wanted = set(selected)
    return [candidate for idx, candidate in enumerate(candidates) if idx in wanted]
