import threading
from typing import Callable

from .log_request import LogRequest
from .loggly_errors import RetryLimitExceeded
from .loggly_options import LogglyOptions
from .loggly_telemetry_logger import LogglyTelemetryLogger


class RetryScheduler:
    """
    Owns the failure path of the async sender.

    A failed request is either dropped once it has used up its retries, or held
    for a fixed delay and resubmitted with its retry count bumped by one. The
    delay is waited on the shutdown event so stopping the client cuts it short
    and the request is abandoned rather than sent once more.
    """

    def __init__(self, options: LogglyOptions, resubmit: Callable[[LogRequest], None],
                 on_abandon: Callable[[LogRequest], None], shutdown_event: threading.Event,
                 logger: LogglyTelemetryLogger):
        self._retry_limit = options.retry_limit
        self._retry_delay = options.retry_delay
        self._resubmit = resubmit
        self._on_abandon = on_abandon
        self._shutdown_event = shutdown_event
        self._logger = logger

    @property
    def retry_limit(self) -> int:
        return self._retry_limit

    def should_drop(self, request: LogRequest) -> bool:
        return request.retries >= self._retry_limit

    def handle_failed_request(self, request: LogRequest) -> bool:
        if self.should_drop(request):
            error = RetryLimitExceeded(request.retries)
            self._logger.warning(str(error))
            self._logger.log_dropped_request("retry_limit", error)
            return False

        if self._shutdown_event.wait(self._retry_delay):
            self._on_abandon(request)
            return False

        self._logger.log_process("Retry", f"Resending failed request (retry {request.retries + 1})")
        self._logger.increment("log_event.retried")
        self._resubmit(LogRequest(request.payload, request.retries + 1))
        return True
