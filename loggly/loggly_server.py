import threading
from typing import Any, Optional, Tuple

from .http_worker import HttpWorker
from .log_dispatcher import LogDispatcher
from .log_request import LogRequest
from .loggly_error_boundary import _LogglyErrorBoundary
from .loggly_errors import LoggerStoppedWarning, LogglyValueError
from .loggly_options import LogglyOptions
from .loggly_telemetry_logger import LogglyTelemetryLogger, create_logger
from .request_result import RequestResult
from .utils import build_endpoint_url, timestamp
from .version import __version__


class LogglyServer:
    _options: LogglyOptions
    _logger: LogglyTelemetryLogger
    _errorBoundary: _LogglyErrorBoundary
    _http_worker: HttpWorker
    _dispatcher: LogDispatcher
    __shutdown_event: threading.Event
    __running: threading.Event

    def __init__(self, token: str, options: Optional[LogglyOptions] = None) -> None:
        if options is None or not isinstance(options, LogglyOptions):
            options = LogglyOptions()

        self._logger = create_logger(options)

        if not isinstance(token, str) or token.strip() == "":
            raise LogglyValueError("Invalid token provided. You must use a customer token from the Loggly console.")

        self._logger.info(f"Starting Loggly client (v{__version__}).")
        self._logger.log_process("Initialize", f"Options: {options.get_logging_copy()}")

        self._options = options
        self._errorBoundary = _LogglyErrorBoundary(self._logger)
        # held across the running check and the enqueue in log(), and across clearing the flag in stop()
        self._stop_lock = threading.Lock()
        self.__shutdown_event = threading.Event()
        self.__running = threading.Event()
        self._http_worker = HttpWorker(build_endpoint_url(options.api, token, options.tags), options, self._logger)
        self._dispatcher = LogDispatcher(self._http_worker, options, self.__shutdown_event, self._errorBoundary,
                                         self._logger)
        self.__running.set()

    @property
    def endpoint_url(self) -> str:
        return self._http_worker.endpoint_url

    @property
    def logger(self) -> LogglyTelemetryLogger:
        return self._logger

    def is_running(self) -> bool:
        return self.__running.is_set()

    def log(self, payload: Any):
        """
        Queues the payload for delivery and returns immediately.
        Failures are reported to the output logger, never to the caller.
        """

        def task():
            with self._stop_lock:
                if self.__running.is_set():
                    self._dispatcher.submit(LogRequest(payload))
                    return
            warning = LoggerStoppedWarning("Loggly logger async sender loop is not running")
            self._logger.warning(str(warning))
            self._logger.log_dropped_request("stopped", warning)

        self._errorBoundary.swallow("log", task)

    def log_sync(self, payload: Any) -> RequestResult:
        """
        Sends the payload on the calling thread, bypassing the queue.

        :raises EncodingError: the payload is not JSON serializable
        :raises TransportError: the request never got a response
        :raises StatusError: the endpoint answered with a non-2xx status
        """
        result = self._http_worker.log_event(payload)
        if result.error is not None:
            raise result.error
        return result

    def stop(self, timeout: Optional[float] = None) -> int:
        """
        Stops accepting new payloads, flushes queued ones and waits for in-flight
        sends to finish. A retry still waiting out its retry_delay is abandoned
        right away instead of being sent once more within the timeout.

        :param timeout: seconds to wait, LogglyOptions.shutdown_timeout when None
        :return: the number of requests abandoned
        """
        with self._stop_lock:
            if not self.__running.is_set():
                self._logger.log_process("Shutdown", "Already stopped")
                return 0
            self.__running.clear()

        if timeout is None:
            timeout = self._options.shutdown_timeout

        self._logger.info("Stopping Loggly async sender loop...")
        abandoned = 0
        try:
            abandoned = self._dispatcher.shutdown(timeout)
        except Exception as e:
            self._errorBoundary.log_exception("stop", e)
        finally:
            self._http_worker.shutdown()

        if abandoned > 0:
            self._logger.warning(f"Loggly client stopped, abandoned {abandoned} requests")
            self._logger.gauge("shutdown.abandoned", abandoned)
        self._logger.info("Stopped Loggly async sender loop")
        self._logger.shutdown()
        return abandoned

    @staticmethod
    def timestamp() -> Tuple[str, str]:
        return timestamp()
