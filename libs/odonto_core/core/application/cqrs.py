from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from time import perf_counter
from typing import Any, Generic, Protocol, TypeVar

import structlog

from odonto_core.core.domain.events.events import DomainEvent
from odonto_core.core.domain.services.event_dispatcher import EventDispatcher

# ───────────────────────────────────────────────
# Buses de comando/consulta e envelope de resultado das fachadas
# ───────────────────────────────────────────────

C = TypeVar("C")
Q = TypeVar("Q")
R = TypeVar("R")
T = TypeVar("T")

logger = structlog.get_logger(__name__)

# ───────────────────────────────────────────────
# DTOs
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Mensagem de escrita despachada pelo CommandBus."""

@dataclass(frozen=True)
class QueryDTO(Generic[Q]):
    """Mensagem de leitura; o parâmetro de tipo é o DTO de filtros."""


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Envelope devolvido pelas fachadas: `{success, data, error}`.

    Falhas esperadas (validação, regra de negócio) nunca sobem como
    exceção para quem chama a fachada; chegam aqui com `success=False`.
    """
    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any = None) -> OperationResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> OperationResult:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        if self.success:
            out["data"] = _serialize(self.data)
        else:
            out["error"] = self.error
        return out


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_serialize(v) for v in value]
    return value

# ───────────────────────────────────────────────
# Handlers
# ───────────────────────────────────────────────
class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any: ...


class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: QueryDTO[Q]) -> R: ...


# ───────────────────────────────────────────────
# Buses
# ───────────────────────────────────────────────
class _Bus:
    """Registro tipo-da-mensagem → handler; cada despacho é cronometrado."""
    kind = "message"

    def __init__(self) -> None:
        self._handlers: dict[type, Any] = {}

    def register(self, message_type: type, handler: Any) -> None:
        if message_type in self._handlers:
            logger.warning("bus.handler_replaced", kind=self.kind, message=message_type.__name__)
        self._handlers[message_type] = handler
        logger.debug("bus.handler_registered", kind=self.kind, message=message_type.__name__)

    def handles(self, message_type: type) -> bool:
        return message_type in self._handlers

    def dispatch(self, message: Any) -> Any:
        name = type(message).__name__
        handler = self._handlers.get(type(message))
        if handler is None:
            raise LookupError(f"Nenhum handler registrado para {self.kind} {name}")

        log = logger.bind(kind=self.kind, message=name, handler=type(handler).__name__)
        started = perf_counter()
        try:
            return handler.handle(message)
        finally:
            log.info("bus.dispatched", duration_ms=round((perf_counter() - started) * 1000, 2))


class CommandBus(_Bus):
    kind = "command"


class QueryBus(_Bus):
    kind = "query"


class CommandBusImpl(CommandBus):
    """Publica no dispatcher o `DomainEvent` que o handler devolver."""

    def __init__(self, dispatcher: EventDispatcher) -> None:
        super().__init__()
        self.dispatcher = dispatcher

    def dispatch(self, command: Any) -> Any:
        result = super().dispatch(command)
        if isinstance(result, DomainEvent):
            self.dispatcher.dispatch(result)
        return result


class QueryBusImpl(QueryBus):
    pass


# ───────────────────────────────────────────────
# Fachadas
# ───────────────────────────────────────────────
class BaseService:
    """Base das fachadas: `execute` para escrita, `query` para leitura."""

    def __init__(self, command_bus: CommandBus, query_bus: QueryBus) -> None:
        self.commands = command_bus
        self.queries = query_bus

    def execute(self, command: CommandDTO) -> Any:
        return self.commands.dispatch(command)

    def query(self, query: QueryDTO[Any]) -> Any:
        return self.queries.dispatch(query)
