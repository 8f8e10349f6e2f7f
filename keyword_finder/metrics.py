# Prometheus metrics
from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNT = Counter(
    "keyword_finder_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)
REQUEST_DURATION = Histogram(
    "keyword_finder_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
)
ACTIVE_REQUESTS = Gauge(
    "keyword_finder_active_requests", "Number of active HTTP requests"
)
SEARCH_OUTCOMES = Counter(
    "keyword_finder_searches_total",
    "Keyword searches by outcome",
    ["outcome"],  # success, invalid_request, pipeline_error
)
MATCHED_KEYWORDS = Histogram(
    "keyword_finder_matched_keywords",
    "Keywords with at least one match per search",
    buckets=(0, 1, 2, 5, 10, 25, 50, 100),
)
