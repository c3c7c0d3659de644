"""Prometheus metrics for SMS recognition rate, suggestions and expense webhook performance"""

from prometheus_client import Counter, Histogram

# Extraction metrics
sms_message_counter = Counter(
    "expense_capture_sms_messages_total",
    "SMS messages seen by the parser",
    ["outcome"],  # parsed | rejected
)

# Suggestion metrics
suggestion_counter = Counter(
    "expense_capture_suggestions_total",
    "Habit suggestions returned",
)

draft_counter = Counter(
    "expense_capture_drafts_total",
    "Expense drafts forwarded to the expense service",
    ["source"],  # sms | suggestion
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "expense_webhook_latency_seconds",
    "Expense service response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "expense_webhook_failures_total",
    "Failed expense deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_sms_batch(message_count: int, candidate_count: int) -> None:
    """Record how many pasted messages were recognized as transactions"""
    sms_message_counter.labels(outcome="parsed").inc(candidate_count)
    sms_message_counter.labels(outcome="rejected").inc(message_count - candidate_count)
