"""Reputation check metrics collection."""

from prometheus_client import Counter, Histogram, Gauge


# Counters
lookups_total = Counter(
    "mailguard_lookups_total",
    "Reputation-zone lookups performed",
    ["outcome"],
)

threats_detected = Counter(
    "mailguard_threats_detected_total",
    "Listed domains detected",
    ["threat_type"],
)

cache_requests = Counter(
    "mailguard_cache_requests_total",
    "Cache lookups",
    ["result"],
)

validation_failures = Counter(
    "mailguard_validation_failures_total",
    "Inputs rejected before any lookup",
    ["kind"],
)

# Histograms
dns_latency = Histogram(
    "mailguard_dns_latency_seconds",
    "Time to answer a reputation-zone query",
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Gauges
cache_entries = Gauge(
    "mailguard_cache_entries",
    "Records currently held by the reputation cache",
)


class MetricsCollector:
    """Collects and exposes reputation check metrics."""

    def record_lookup(self, outcome: str, latency_seconds: float):
        """Record a reputation-zone lookup (listed, clean or error)."""
        lookups_total.labels(outcome=outcome).inc()
        dns_latency.observe(latency_seconds)

    def record_threat(self, threat_type: str):
        """Record a listed domain."""
        threats_detected.labels(threat_type=threat_type).inc()

    def record_cache_hit(self):
        cache_requests.labels(result="hit").inc()

    def record_cache_miss(self):
        cache_requests.labels(result="miss").inc()

    def record_validation_failure(self, kind: str):
        """Record rejected input (email or domain)."""
        validation_failures.labels(kind=kind).inc()

    def set_cache_entries(self, count: int):
        """Set cache size."""
        cache_entries.set(count)
