"""Background delivery of accepted drafts to the expense service"""

import logging

from expense_capture.domain.exceptions import ExpenseServiceError
from expense_capture.domain.models import ExpenseDraft
from expense_capture.infrastructure.clients.expense_service import ExpenseServiceClient
from expense_capture.infrastructure.observability.metrics import draft_counter


async def forward_draft(client: ExpenseServiceClient, draft: ExpenseDraft, source: str, request_id: str) -> None:
    """Deliver one draft; failures are logged since the response has already been sent"""
    try:
        await client.create_expense(draft)
        draft_counter.labels(source=source).inc()
    except ExpenseServiceError as e:
        logging.error(f"Expense delivery failed: {e}", extra={"request_id": request_id, "draft_id": draft.id})
