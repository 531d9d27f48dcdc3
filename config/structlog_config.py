import logging
import os
import sys

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

# loggers da stdlib que só interessam em depuração pontual
QUIET_LOGGERS = {
    "django.db.backends": "WARNING",
    "django.utils.autoreload": "WARNING",
}


def _shared_chain() -> list:
    """Processors aplicados tanto a structlog quanto a logs da stdlib."""
    return [
        structlog.contextvars.merge_contextvars,     # clinic_id, user_id, role
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(json_logs: bool):
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _stdout_handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(json_logs),
            foreign_pre_chain=_shared_chain(),
        )
    )
    return handler


def configure_logging(
    level: str = "INFO",
    json_logs: bool = bool(os.getenv("JSON_LOGS", "")),
) -> None:
    """
    Liga structlog ao logging da stdlib com um único handler em stdout.

    `json_logs` troca o console colorido por JSON de uma linha. Chamado
    pelo settings, antes que os containers criem seus loggers.
    """
    level = level.upper()

    structlog.configure(
        processors=[
            *_shared_chain(),
            CallsiteParameterAdder([
                CallsiteParameter.MODULE,
                CallsiteParameter.FUNC_NAME,
                CallsiteParameter.LINENO,
            ]),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stdout_handler(json_logs))
    root.setLevel(level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    logging.captureWarnings(True)
