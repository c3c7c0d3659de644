"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from expense_capture.domain.models import ExpenseDraft, ExpenseRecord, Suggestion, TransactionCandidate


class ParseRequest(BaseModel):
    """Request body for POST /v1/sms/parse"""

    text: str = Field(..., description="One or more pasted bank SMS messages")
    today: Optional[date] = Field(None, description="Date used when a message carries none")


class ImportRequest(ParseRequest):
    """Request body for POST /v1/sms/import"""

    selected: Optional[List[int]] = Field(None, description="Indices of parsed transactions to import; all when omitted")


class CandidateSchema(BaseModel):
    """Single transaction extracted from an SMS"""

    amount: float
    direction: Literal["expense", "income"]
    merchant: str
    date: date
    category: str
    account: Optional[str] = None
    raw_text: str

    @classmethod
    def from_domain(cls, candidate: TransactionCandidate) -> "CandidateSchema":
        return cls(
            amount=float(candidate.amount),
            direction=candidate.direction,
            merchant=candidate.merchant,
            date=candidate.date,
            category=candidate.category,
            account=candidate.account,
            raw_text=candidate.raw_text,
        )


class ParseResponse(BaseModel):
    """Response for POST /v1/sms/parse"""

    count: int
    transactions: List[CandidateSchema]


class DraftSchema(BaseModel):
    """Expense handed to the expense service"""

    id: str
    title: str
    amount: float
    category: str
    date: date
    type: Literal["expense", "income"]
    account: Optional[str] = None
    tags: List[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, draft: ExpenseDraft) -> "DraftSchema":
        return cls(
            id=draft.id,
            title=draft.title,
            amount=float(draft.amount),
            category=draft.category,
            date=draft.date,
            type=draft.type,
            account=draft.account,
            tags=draft.tags,
            created_at=draft.created_at,
        )


class ImportResponse(BaseModel):
    """Response for POST /v1/sms/import"""

    imported: int
    drafts: List[DraftSchema]


class ExpenseRecordSchema(BaseModel):
    """Historical expense as stored by the expense service"""

    model_config = ConfigDict(populate_by_name=True)

    amount: Decimal = Field(..., ge=0)
    category: str
    type: Literal["expense", "income"]
    date: date
    merchant: Optional[str] = None
    title: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    def to_domain(self) -> ExpenseRecord:
        return ExpenseRecord(
            amount=self.amount,
            category=self.category,
            type=self.type,
            date=self.date,
            merchant=self.merchant,
            title=self.title,
            created_at=self.created_at,
        )


class SuggestionsRequest(BaseModel):
    """Request body for POST /v1/suggestions"""

    history: List[ExpenseRecordSchema] = Field(default_factory=list)
    now: Optional[datetime] = Field(None, description="Reference time; server clock when omitted")


class SuggestionSchema(BaseModel):
    """Single habit-based suggestion"""

    category: str
    merchant: str
    suggested_amount: int
    message: str
    score: float
    frequency_score: float = 0.0
    hour_proximity_score: float = 0.0
    occurrence_count: int = 1

    @classmethod
    def from_domain(cls, suggestion: Suggestion) -> "SuggestionSchema":
        return cls(
            category=suggestion.category,
            merchant=suggestion.merchant,
            suggested_amount=suggestion.suggested_amount,
            message=suggestion.message,
            score=suggestion.score,
            frequency_score=suggestion.frequency_score,
            hour_proximity_score=suggestion.hour_proximity_score,
            occurrence_count=suggestion.occurrence_count,
        )

    def to_domain(self) -> Suggestion:
        return Suggestion(
            category=self.category,
            merchant=self.merchant,
            suggested_amount=self.suggested_amount,
            message=self.message,
            score=self.score,
            frequency_score=self.frequency_score,
            hour_proximity_score=self.hour_proximity_score,
            occurrence_count=self.occurrence_count,
        )


class SuggestionsResponse(BaseModel):
    """Response for POST /v1/suggestions"""

    suggestions: List[SuggestionSchema]


class AcceptSuggestionRequest(BaseModel):
    """Request body for POST /v1/suggestions/accept"""

    suggestion: SuggestionSchema
    today: Optional[date] = None
