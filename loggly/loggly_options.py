from typing import Any, Callable, Dict, List, Optional

from .interface_observability_client import ObservabilityClient
from .loggly_errors import LogglyValueError
from .output_logger import OutputLogger, LogLevel

LOGGLY_API = "https://logs-01.loggly.com/"

DEFAULT_TAGS = ["bulk"]
DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_QUEUE_SIZE = 32
DEFAULT_RETRY_QUEUE_SIZE = 32
DEFAULT_RETRY_LIMIT = 3
DEFAULT_RETRY_DELAY = 3.0
DEFAULT_SEND_THREAD_LIMIT = 8
DEFAULT_RETRY_THREAD_LIMIT = 8
DEFAULT_SHUTDOWN_TIMEOUT = 10.0


class LogglyOptions:
    """
    An object of properties for configuring the client with additional parameters
    All time related options are in seconds
    """

    def __init__(
            self,
            api: Optional[str] = None,
            tags: Optional[List[str]] = None,
            timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
            queue_size: int = DEFAULT_QUEUE_SIZE,
            retry_queue_size: int = DEFAULT_RETRY_QUEUE_SIZE,
            retry_limit: int = DEFAULT_RETRY_LIMIT,
            retry_delay: float = DEFAULT_RETRY_DELAY,
            send_thread_limit: int = DEFAULT_SEND_THREAD_LIMIT,
            retry_thread_limit: int = DEFAULT_RETRY_THREAD_LIMIT,
            # None leaves concurrent sends bounded only by send_thread_limit,
            # 1 serializes every request to the endpoint
            max_in_flight_requests: Optional[int] = None,
            shutdown_timeout: Optional[float] = DEFAULT_SHUTDOWN_TIMEOUT,
            custom_logger: Optional[OutputLogger] = None,
            output_logger_level: Optional[LogLevel] = LogLevel.WARNING,
            disable_output_logging: bool = False,
            observability_client: Optional[ObservabilityClient] = None,
            error_callback: Optional[Callable[[str, Exception], None]] = None,
    ):
        self.api = api or LOGGLY_API
        self.tags = list(tags) if tags else list(DEFAULT_TAGS)
        self.timeout = timeout
        self.queue_size = queue_size
        self.retry_queue_size = retry_queue_size
        self.retry_limit = retry_limit
        self.retry_delay = retry_delay
        self.send_thread_limit = send_thread_limit
        self.retry_thread_limit = retry_thread_limit
        self.max_in_flight_requests = max_in_flight_requests
        self.shutdown_timeout = shutdown_timeout
        self.custom_logger = custom_logger
        self.output_logger_level = output_logger_level
        self.disable_output_logging = disable_output_logging
        self.observability_client = observability_client
        self.error_callback = error_callback
        self._validate()

    def _validate(self):
        for name in ("queue_size", "retry_queue_size", "send_thread_limit", "retry_thread_limit"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise LogglyValueError(f"LogglyOptions.{name} must be a positive int")
        if not isinstance(self.retry_limit, int) or self.retry_limit < 0:
            raise LogglyValueError("LogglyOptions.retry_limit must be a non-negative int")
        if self.retry_delay is None or self.retry_delay < 0:
            raise LogglyValueError("LogglyOptions.retry_delay must be a non-negative number")
        if self.max_in_flight_requests is not None and (
                not isinstance(self.max_in_flight_requests, int) or self.max_in_flight_requests < 1):
            raise LogglyValueError("LogglyOptions.max_in_flight_requests must be None or a positive int")
        if any(not isinstance(tag, str) or tag == "" or "/" in tag for tag in self.tags):
            raise LogglyValueError("LogglyOptions.tags must be non-empty strings without '/'")

    def get_logging_copy(self) -> Dict[str, Any]:
        logging_copy: Dict[str, Any] = {}
        if self.api != LOGGLY_API:
            logging_copy["api"] = self.api
        if self.tags != DEFAULT_TAGS:
            logging_copy["tags"] = self.tags
        if self.timeout != DEFAULT_REQUEST_TIMEOUT:
            logging_copy["timeout"] = self.timeout
        if self.queue_size != DEFAULT_QUEUE_SIZE:
            logging_copy["queue_size"] = self.queue_size
        if self.retry_queue_size != DEFAULT_RETRY_QUEUE_SIZE:
            logging_copy["retry_queue_size"] = self.retry_queue_size
        if self.retry_limit != DEFAULT_RETRY_LIMIT:
            logging_copy["retry_limit"] = self.retry_limit
        if self.retry_delay != DEFAULT_RETRY_DELAY:
            logging_copy["retry_delay"] = self.retry_delay
        if self.send_thread_limit != DEFAULT_SEND_THREAD_LIMIT:
            logging_copy["send_thread_limit"] = self.send_thread_limit
        if self.retry_thread_limit != DEFAULT_RETRY_THREAD_LIMIT:
            logging_copy["retry_thread_limit"] = self.retry_thread_limit
        if self.max_in_flight_requests is not None:
            logging_copy["max_in_flight_requests"] = self.max_in_flight_requests
        if self.shutdown_timeout != DEFAULT_SHUTDOWN_TIMEOUT:
            logging_copy["shutdown_timeout"] = self.shutdown_timeout
        if self.disable_output_logging:
            logging_copy["disable_output_logging"] = True
        if self.observability_client is not None:
            logging_copy["observability_client"] = "SET"
        if self.error_callback is not None:
            logging_copy["error_callback"] = "SET"
        return logging_copy
