"""Expense service webhook client with exponential backoff retry logic"""

import asyncio
from typing import Optional

import httpx

from expense_capture.config import settings
from expense_capture.domain.exceptions import ExpenseServiceError
from expense_capture.domain.models import ExpenseDraft
from expense_capture.infrastructure.observability.metrics import webhook_failure_counter, webhook_latency_histogram


class ExpenseServiceClient:
    """Client for the external "create expense" endpoint"""

    def __init__(
        self,
        webhook_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url or settings.expense_service_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base
        self.transport = transport

    async def create_expense(self, draft: ExpenseDraft) -> None:
        """
        Send an accepted draft to the expense service with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^(attempt-1))
        - Retries on 4xx/5xx responses and network failures
        - Tracks latency histogram and failure counter

        Raises:
            ExpenseServiceError: once all attempts have failed
        """
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=draft.to_payload())
                        response.raise_for_status()
                        return  # Success

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        raise ExpenseServiceError(
                            f"Expense {draft.id} not delivered after {attempt} attempts: {e}"
                        ) from e

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)
