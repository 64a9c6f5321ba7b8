"""Prometheus metrics for monitoring round-ups, credit scores, forecasts and webhook performance"""

from prometheus_client import Counter, Histogram

# Engine metrics
roundup_amount_histogram = Histogram(
    "roundup_amount",
    "Spare change generated per round-up",
    buckets=[0.5, 1.0, 2.0, 3.0, 4.0, 5.0],
)

credit_score_counter = Counter(
    "roundup_credit_score_total",
    "Credit scores computed by band",
    ["band"],  # 0-19 | 20-39 | 40-59 | 60-79 | 80-100
)

forecast_trend_counter = Counter(
    "roundup_forecast_total",
    "Income forecasts produced by trend",
    ["trend"],  # increasing | decreasing | stable
)

# Text generation metrics
advisor_fallback_counter = Counter(
    "advisor_fallbacks_total",
    "Default text substituted because the language model was unavailable",
    ["kind"],  # advice | explanation
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Ledger webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Record store metrics
store_read_failures_counter = Counter(
    "store_read_failures_total",
    "Record store reads that failed and degraded a score dimension",
    ["dimension"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def score_band(score: int) -> str:
    """Bucket a 0-100 score into 20-point bands"""
    if score >= 80:
        return "80-100"
    lower = (score // 20) * 20
    return f"{lower}-{lower + 19}"


def record_credit_score(score: int) -> None:
    """Record credit score distribution"""
    credit_score_counter.labels(band=score_band(score)).inc()


def record_forecast(trend: str) -> None:
    forecast_trend_counter.labels(trend=trend).inc()
