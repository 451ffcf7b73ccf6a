import functools
from typing import Optional, Dict, Any, Callable

from .interface_observability_client import ObservabilityClient
from .loggly_options import LogglyOptions
from .output_logger import OutputLogger

TELEMETRY_PREFIX = "loggly.client"


class NoopObservabilityClient(ObservabilityClient):
    noop = True


def handle_exceptions(method):
    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except Exception:
            return None

    return wrapper


class AutoTryCatch:
    def __init_subclass__(cls, **kwargs):
        super(AutoTryCatch, cls).__init_subclass__(**kwargs)
        for attr_name, attr_value in cls.__dict__.items():
            if callable(attr_value) and not attr_name.startswith("__"):
                setattr(cls, attr_name, handle_exceptions(attr_value))


class LogglyTelemetryLogger(AutoTryCatch):
    """
    Diagnostics, metrics and the dropped-request callback of one client.

    Every LogglyServer owns its own instance, so two clients in the same
    process never report into each other's callback or metrics backend.
    """

    def __init__(self, logger=None, ob_client: Optional[ObservabilityClient] = None,
                 error_callback: Optional[Callable[[str, Exception], None]] = None):
        self.logger = logger or OutputLogger(TELEMETRY_PREFIX)
        self.ob_client = ob_client or NoopObservabilityClient()
        self.error_callback = error_callback

    def init(self):
        self.ob_client.init()

    def debug(self, msg, *args, **kwargs):
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.logger.warning(msg, *args, **kwargs)

    def log_process(self, process, msg):
        self.logger.log_process(process, msg)

    def increment(self, metric_name: str, value: int = 1, tags: Optional[Dict[str, Any]] = None):
        self.ob_client.increment(f'{TELEMETRY_PREFIX}.{metric_name}', value, tags or {})

    def gauge(self, metric_name: str, value: float, tags: Optional[Dict[str, Any]] = None):
        self.ob_client.gauge(f'{TELEMETRY_PREFIX}.{metric_name}', value, tags or {})

    def distribution(self, metric_name: str, value: float, tags: Optional[Dict[str, Any]] = None):
        self.ob_client.distribution(f'{TELEMETRY_PREFIX}.{metric_name}', value, tags or {})

    def log_dropped_request(self, reason: str, exception: Exception):
        """Reports an async request that will never be delivered."""
        if self.error_callback is not None:
            self.error_callback(reason, exception)

        self.increment("log_event.dropped", 1, {"reason": reason})

    def shutdown(self):
        self.ob_client.shutdown()


def create_logger(options: LogglyOptions) -> LogglyTelemetryLogger:
    output_logger = options.custom_logger
    if output_logger is None:
        output_logger = OutputLogger(TELEMETRY_PREFIX, disabled=options.disable_output_logging)
        if options.output_logger_level is not None:
            output_logger.set_log_level(options.output_logger_level)
    logger = LogglyTelemetryLogger(output_logger, options.observability_client, options.error_callback)
    logger.init()
    return logger
