"""POST /v1/suggestions - habit-based expense suggestions"""

import time

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from expense_capture.api.dependencies import get_expense_client, get_request_id
from expense_capture.api.v1.forwarding import forward_draft
from expense_capture.api.v1.schemas import (
    AcceptSuggestionRequest,
    DraftSchema,
    SuggestionSchema,
    SuggestionsRequest,
    SuggestionsResponse,
)
from expense_capture.domain.drafts import draft_from_suggestion
from expense_capture.domain.suggestions import get_suggestions
from expense_capture.infrastructure.clients.expense_service import ExpenseServiceClient
from expense_capture.infrastructure.observability.logging import log_suggestions
from expense_capture.infrastructure.observability.metrics import suggestion_counter

router = APIRouter()


@router.post("/suggestions", response_model=SuggestionsResponse)
def suggest_expenses(request_body: SuggestionsRequest, request: Request):
    """
    Rank the user's spending habits against the current time.

    Returns at most 3 suggestions, strongest first.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    history = [record.to_domain() for record in request_body.history]
    suggestions = get_suggestions(history, request_body.now)

    suggestion_counter.inc(len(suggestions))
    log_suggestions(request_id, len(history), len(suggestions), (time.time() - start_time) * 1000)

    return SuggestionsResponse(suggestions=[SuggestionSchema.from_domain(s) for s in suggestions])


@router.post("/suggestions/accept", response_model=DraftSchema)
async def accept_suggestion(
    request_body: AcceptSuggestionRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    expense_client: ExpenseServiceClient = Depends(get_expense_client),
):
    """Turn a suggestion into an expense dated today and forward it"""
    draft = draft_from_suggestion(request_body.suggestion.to_domain(), request_body.today)
    background_tasks.add_task(forward_draft, expense_client, draft, "suggestion", get_request_id(request))

    return DraftSchema.from_domain(draft)
