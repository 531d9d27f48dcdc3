from collections.abc import Callable

import structlog

from odonto_core.core.domain.events.events import DomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


def _name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", handler.__class__.__name__)


class EventDispatcher:
    """
    Dispatcher síncrono de eventos de domínio.

    Um assinante registrado para uma classe base recebe também as
    subclasses (ex.: `AttendanceTransitionEvent` cobre check-in, início,
    finalização e cancelamento). A ordem de entrega segue o MRO do evento
    e, dentro de cada classe, a ordem de inscrição.

    Falha de um assinante é registrada e não interrompe os demais nem
    o comando que originou o evento.
    """

    def __init__(self) -> None:
        self._subs: dict[type[DomainEvent], list[EventHandler]] = {}

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        handlers = self._subs.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("event.subscribed", event_type=event_type.__name__, handler_name=_name(handler))

    def handlers_for(self, event: DomainEvent) -> list[EventHandler]:
        found: list[EventHandler] = []
        for cls in type(event).__mro__:
            for handler in self._subs.get(cls, ()):
                if handler not in found:
                    found.append(handler)
        return found

    def dispatch(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(event)
        logger.info(
            "event.dispatch",
            event_name=type(event).__name__,
            clinic_id=str(getattr(event, "clinic_id", "")) or None,
            listeners=len(handlers),
        )
        for handler in handlers:
            try:
                handler(event)
            except Exception as exc:
                logger.error(
                    "event.handler_error",
                    event_name=type(event).__name__,
                    handler_name=_name(handler),
                    error=str(exc),
                    exc_info=True,
                )
