from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        # Try to create it
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "quicktask_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "quicktask_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TASKS_PARSED_TOTAL = get_or_create_metric(
    "quicktask_tasks_parsed_total",
    "Tasks parsed from free text",
    Counter,
    labelnames=["source"],
)

AI_FALLBACK_TOTAL = get_or_create_metric(
    "quicktask_ai_fallback_total",
    "AI parses that fell back to the rule-based parser",
    Counter,
)

TASKS_STORED = get_or_create_metric(
    "quicktask_tasks_stored", "Tasks currently in the store", Gauge
)
