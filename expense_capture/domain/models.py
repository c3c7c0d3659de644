"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

EXPENSE = "expense"
INCOME = "income"


@dataclass(frozen=True)
class TransactionCandidate:
    """Transaction extracted from a bank SMS, not yet committed"""

    amount: Decimal
    direction: str  # "expense" or "income"
    merchant: str
    date: date
    category: str
    raw_text: str
    account: Optional[str] = None  # last 4 digits of the masked account number


@dataclass
class ExpenseRecord:
    """Historical transaction as stored by the expense service"""

    amount: Decimal
    category: str
    type: str  # "expense" or "income"
    date: date
    merchant: Optional[str] = None
    title: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Habit:
    """Expenses sharing a (category, merchant) key"""

    category: str
    merchant: str
    occurrence_count: int = 0
    observed_hours: List[int] = field(default_factory=list)
    observed_days: List[int] = field(default_factory=list)  # Sunday = 0
    amounts: List[Decimal] = field(default_factory=list)


@dataclass
class Suggestion:
    """Likely next expense proposed from a habit"""

    category: str
    merchant: str
    suggested_amount: int
    message: str
    score: float
    frequency_score: float
    hour_proximity_score: float
    occurrence_count: int


@dataclass
class ExpenseDraft:
    """Payload handed to the expense service when the user accepts a candidate or suggestion"""

    id: str
    title: str
    amount: Decimal
    category: str
    date: date
    type: str
    created_at: datetime
    account: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def to_payload(self) -> dict:
        """Serialize using the expense service's field names"""
        payload = {
            "id": self.id,
            "title": self.title,
            "amount": float(self.amount),
            "category": self.category,
            "date": self.date.isoformat(),
            "type": self.type,
            "createdAt": self.created_at.isoformat(),
            "tags": list(self.tags),
        }
        if self.account:
            payload["accountId"] = self.account
        return payload
