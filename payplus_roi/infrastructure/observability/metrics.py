"""Prometheus metrics for calculation volume, savings outcomes and slider activity"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "payplus_calculation_total",
    "Total ROI calculations computed",
    ["currency"],
)

savings_bucket_counter = Counter(
    "payplus_savings_bucket",
    "Calculations by cost savings percentage bucket",
    ["bucket"],  # negative, 0-20%, 20-50%, 50%+
)

validation_failure_counter = Counter(
    "payplus_validation_failures_total",
    "Snapshots that failed validation",
)

# Input adjustments
currency_change_counter = Counter(
    "payplus_currency_change_total",
    "Currency conversions applied to snapshots",
    ["from_currency", "to_currency"],
)

fx_tier_adjustment_counter = Counter(
    "payplus_fx_tier_adjustment_total",
    "FX tier slider adjustments",
    ["tier"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(currency: str, savings_percentage: float) -> None:
    """Record calculation metrics for monitoring savings distribution"""
    calculation_counter.labels(currency=currency).inc()

    # Bucket savings for distribution analysis
    if savings_percentage < 0:
        bucket = "negative"
    elif savings_percentage < 20:
        bucket = "0-20%"
    elif savings_percentage < 50:
        bucket = "20-50%"
    else:
        bucket = "50%+"

    savings_bucket_counter.labels(bucket=bucket).inc()
