import structlog
from prometheus_client import Counter

from clinical_attendance.core.domain.events.events import AttendanceTransitionEvent
from odonto_core.adapters.observability.metrics import registry

logger = structlog.get_logger(__name__)

# mesmo registry do núcleo: um único endpoint de scrape
ATTENDANCE_TRANSITIONS = Counter(
    "attendance_transitions_total",
    "Transicoes de status de atendimentos",
    ["transition"],
    registry=registry,
)


def record_transition(event: AttendanceTransitionEvent) -> None:
    """Assinante do EventDispatcher para as transições de status."""
    ATTENDANCE_TRANSITIONS.labels(transition=event.transition).inc()
    logger.debug("attendance.transition_counted", transition=event.transition)
