from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()

OPERATION_DURATION = Histogram(
    "clinic_operation_duration_seconds",
    "Duracao dos casos de uso da clinica",
    ["operation"],
    registry=registry,
)

OPERATION_FAILURES = Counter(
    "clinic_operation_failures_total",
    "Casos de uso que terminaram em falha",
    ["operation", "kind"],
    registry=registry,
)


def render_latest() -> tuple[bytes, str]:
    """Corpo e content-type para um endpoint de scrape."""
    return generate_latest(registry), CONTENT_TYPE_LATEST
