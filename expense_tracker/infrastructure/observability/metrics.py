"""Prometheus metrics for expense actions, payments and store health"""

from prometheus_client import Counter, Histogram

# Action metrics
action_counter = Counter(
    "expense_actions_total",
    "Expense actions handled",
    ["action", "outcome"],  # outcome: ok | invalid_input | not_found | already_paid | conflict | store_error
)

# Payment metrics
expenses_paid_counter = Counter(
    "expenses_paid_total",
    "Expenses transitioned to paid",
)

payment_batch_size_histogram = Histogram(
    "payment_batch_size",
    "Number of expenses settled per payment batch",
    buckets=[1, 2, 3, 5, 10, 25, 50],
)

# Store metrics
store_failures_counter = Counter(
    "store_failures_total",
    "Failed record store reads or writes",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_action(action: str, outcome: str = "ok") -> None:
    action_counter.labels(action=action, outcome=outcome).inc()


def record_payment(batch_size: int) -> None:
    """Record a payment batch for monitoring settlement volume"""
    expenses_paid_counter.inc(batch_size)
    payment_batch_size_histogram.observe(batch_size)
