"""POST /v1/sms/parse and /v1/sms/import - bank SMS extraction endpoints"""

import logging
import time
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request

from expense_capture.api.dependencies import get_expense_client, get_request_id
from expense_capture.api.v1.forwarding import forward_draft
from expense_capture.api.v1.schemas import (
    CandidateSchema,
    DraftSchema,
    ImportRequest,
    ImportResponse,
    ParseRequest,
    ParseResponse,
)
from expense_capture.domain.drafts import draft_from_candidate, select_candidates
from expense_capture.domain.exceptions import InvalidSelectionError, NoTransactionsFoundError
from expense_capture.domain.models import TransactionCandidate
from expense_capture.domain.sms_parser import parse_sms, split_messages
from expense_capture.infrastructure.clients.expense_service import ExpenseServiceClient
from expense_capture.infrastructure.observability.logging import log_sms_parse
from expense_capture.infrastructure.observability.metrics import record_sms_batch

router = APIRouter()


def _parse_and_record(text: str, today: Optional[date], request_id: str, start_time: float) -> List[TransactionCandidate]:
    messages = split_messages(text)
    parsed = (parse_sms(message, today) for message in messages)
    candidates = [candidate for candidate in parsed if candidate is not None]
    message_count = len(messages)

    record_sms_batch(message_count, len(candidates))
    log_sms_parse(request_id, message_count, len(candidates), (time.time() - start_time) * 1000)
    return candidates


@router.post("/sms/parse", response_model=ParseResponse)
def parse_sms_text(request_body: ParseRequest, request: Request):
    """
    Extract transactions from pasted bank SMS text.

    Unrecognized messages are dropped; an empty list is a valid answer.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    candidates = _parse_and_record(request_body.text, request_body.today, request_id, start_time)

    return ParseResponse(
        count=len(candidates),
        transactions=[CandidateSchema.from_domain(c) for c in candidates],
    )


@router.post("/sms/import", response_model=ImportResponse)
async def import_sms_text(
    request_body: ImportRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    expense_client: ExpenseServiceClient = Depends(get_expense_client),
):
    """
    Parse pasted SMS text and import the selected transactions.

    Flow:
    1. Parse the text into candidates
    2. Keep the candidates the user selected (all by default)
    3. Build expense drafts
    4. Forward each draft to the expense service in the background
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        candidates = _parse_and_record(request_body.text, request_body.today, request_id, start_time)
        if not candidates:
            raise NoTransactionsFoundError("No valid transactions found. Please check the SMS format.")

        drafts = [draft_from_candidate(c) for c in select_candidates(candidates, request_body.selected)]

        for draft in drafts:
            background_tasks.add_task(forward_draft, expense_client, draft, "sms", request_id)

        return ImportResponse(
            imported=len(drafts),
            drafts=[DraftSchema.from_domain(d) for d in drafts],
        )

    except (NoTransactionsFoundError, InvalidSelectionError) as e:
        logging.warning(f"Import rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
