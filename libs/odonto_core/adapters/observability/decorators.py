import time
from functools import wraps

import structlog
from pydantic import ValidationError

from odonto_core.adapters.observability.metrics import OPERATION_DURATION, OPERATION_FAILURES
from odonto_core.core.application.cqrs import OperationResult
from odonto_core.core.application.validation import format_validation_error
from odonto_core.core.domain.exceptions import ClinicError

logger = structlog.get_logger(__name__)

INTERNAL_ERROR = "Erro interno do servidor"


def as_operation_result(operation: str):
    """
    Converte o desfecho de um método de fachada em `OperationResult`.

    O primeiro argumento após `self` deve ser a `SessionContext`; seus
    campos ficam no contexto de log durante a chamada.

    - ValidationError → "Dados inválidos: ..."
    - ClinicError     → mensagem da regra violada
    - demais          → erro genérico, com stack no log
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, session, *args, **kwargs):
            start = time.perf_counter()
            with structlog.contextvars.bound_contextvars(operation=operation, **session.log_context()):
                try:
                    data = fn(self, session, *args, **kwargs)
                except ValidationError as exc:
                    OPERATION_FAILURES.labels(operation=operation, kind="validation").inc()
                    message = format_validation_error(exc)
                    logger.info("operation.invalid_input", error=message)
                    return OperationResult.fail(message)
                except ClinicError as exc:
                    OPERATION_FAILURES.labels(operation=operation, kind=type(exc).__name__).inc()
                    logger.warning("operation.rejected", error=str(exc), kind=type(exc).__name__)
                    return OperationResult.fail(str(exc))
                except Exception as exc:
                    OPERATION_FAILURES.labels(operation=operation, kind="internal").inc()
                    logger.error("operation.failed", error=str(exc), exc_info=True)
                    return OperationResult.fail(INTERNAL_ERROR)
                finally:
                    OPERATION_DURATION.labels(operation=operation).observe(time.perf_counter() - start)
            if isinstance(data, OperationResult):
                return data
            return OperationResult.ok(data)
        return wrapper
    return decorator
