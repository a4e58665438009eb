import logging
from typing import Any

import structlog
from structlog.types import EventDict, Processor


def drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    """
    Some servers log the message a second time in the extra `color_message`, but
    we don't need it. This processor drops the key from the event dict if it exists.
    """
    event_dict.pop("color_message", None)
    return event_dict


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog for the envbind package"""

    # Leave an already configured host application alone
    root_logger = logging.getLogger()
    if root_logger.handlers or structlog.is_configured():
        return

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        drop_color_message_key,
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # Format the exception only for JSON logs, as we want to pretty-print them when
        # using the ConsoleRenderer
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_renderer: structlog.types.Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # These run ONLY on `logging` entries that do NOT originate within
        # structlog.
        foreign_pre_chain=shared_processors,
        # These run on ALL entries after the pre_chain is done.
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


class EnvbindStructLogger:
    """
    Structured logger for the envbind package.

    Values bound with `bind` are attached to every event emitted through the
    returned logger. The underlying structlog logger is resolved lazily on
    each call, so reconfiguring structlog later is picked up.
    """

    def __init__(self, log_name: str = "envbind", context: dict[str, Any] | None = None):
        self.log_name = log_name
        self.logger = structlog.stdlib.get_logger(log_name)
        self._context = dict(context or {})

    def bind(self, **new_values: Any) -> "EnvbindStructLogger":
        """Return a new logger carrying the current context plus `new_values`."""
        context = {**self._context, **new_values}
        return EnvbindStructLogger(self.log_name, context)

    def _merge(self, kw: dict[str, Any]) -> dict[str, Any]:
        return {**self._context, **kw}

    def debug(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.debug(event, *args, **self._merge(kw))

    def info(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.info(event, *args, **self._merge(kw))

    def warning(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.warning(event, *args, **self._merge(kw))

    warn = warning

    def error(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.error(event, *args, **self._merge(kw))

    def exception(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.exception(event, *args, **self._merge(kw))


def get_envbind_logger(log_name: str = "envbind") -> EnvbindStructLogger:
    """Get the package structured logger."""
    return EnvbindStructLogger(log_name)


def init_logger(settings):
    """
    Initialize the structured logger for the envbind package.

    Args:
        settings: EnvbindSettings with logging options

    Returns:
        EnvbindStructLogger: Configured structured logger instance
    """
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)

    return EnvbindStructLogger("envbind")
