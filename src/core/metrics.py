"""Prometheus metrics for the Classbank service.

Metrics are organized into two categories:

Business Metrics (for teachers/classroom dashboards):
- classbank_transfer_total: Completed transfers
- classbank_transfer_amount_cents_total: Money moved by transfers
- classbank_fine_total: Fines issued
- classbank_loan_application_total: Loan applications by outcome
- classbank_loan_repayment_total: Repayments by kind (standard, extra, auto)
- classbank_autopay_outcome_total: Sweep outcomes per loan (paid, missed, error)

Technical Metrics (for Engineering/SRE dashboards):
- classbank_autopay_sweep_latency_seconds: Sweep duration
- classbank_autopay_last_run_loans: Loans processed by the last sweep
- classbank_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

transfer_total = Counter(
    "classbank_transfer_total",
    "Total number of completed transfers",
)

transfer_amount_total = Counter(
    "classbank_transfer_amount_cents_total",
    "Total amount moved by transfers in cents",
)

fine_total = Counter(
    "classbank_fine_total",
    "Total number of fines issued",
    ["collected"],  # full, partial, none
)

loan_application_total = Counter(
    "classbank_loan_application_total",
    "Total number of loan applications",
    ["outcome"],  # approved, denied
)

loan_repayment_total = Counter(
    "classbank_loan_repayment_total",
    "Total number of loan repayments",
    ["kind"],  # standard, extra, auto
)

loans_paid_off_total = Counter(
    "classbank_loans_paid_off_total",
    "Total number of loans that reached a zero balance",
)

autopay_outcome_total = Counter(
    "classbank_autopay_outcome_total",
    "Auto-pay sweep outcomes per loan",
    ["outcome"],  # paid, missed, error
)


# =============================================================================
# Technical Metrics
# =============================================================================

autopay_sweep_latency = Histogram(
    "classbank_autopay_sweep_latency_seconds",
    "Auto-pay sweep duration in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

autopay_last_run_loans = Gauge(
    "classbank_autopay_last_run_loans",
    "Number of loans processed by the most recent sweep",
)

http_requests_total = Counter(
    "classbank_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "classbank_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_transfer(amount_cents: int) -> None:
    """Record a completed transfer."""
    transfer_total.inc()
    transfer_amount_total.inc(amount_cents)


def record_fine(levied_cents: int, collected_cents: int) -> None:
    """Record an issued fine and how much of it could be collected."""
    if collected_cents == 0:
        collected = "none"
    elif collected_cents < levied_cents:
        collected = "partial"
    else:
        collected = "full"
    fine_total.labels(collected=collected).inc()


def record_loan_application(approved: bool) -> None:
    """Record a loan application outcome."""
    outcome = "approved" if approved else "denied"
    loan_application_total.labels(outcome=outcome).inc()


def record_loan_repayment(kind: str, paid_off: bool) -> None:
    """Record a repayment (standard, extra or auto)."""
    loan_repayment_total.labels(kind=kind).inc()
    if paid_off:
        loans_paid_off_total.inc()


def record_autopay_outcome(outcome: str) -> None:
    """Record the outcome of one loan within a sweep."""
    autopay_outcome_total.labels(outcome=outcome).inc()


def record_autopay_sweep(processed: int) -> None:
    """Record the size of a completed sweep."""
    autopay_last_run_loans.set(processed)


@contextmanager
def track_autopay_sweep_latency() -> Generator[None, None, None]:
    """Context manager to track sweep latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        autopay_sweep_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
