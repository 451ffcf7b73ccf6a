import traceback

from .loggly_errors import LogglyError
from .loggly_telemetry_logger import LogglyTelemetryLogger


class _LogglyErrorBoundary:
    def __init__(self, logger: LogglyTelemetryLogger):
        self._logger = logger
        self._seen: set = set()

    def capture(self, tag: str, task, recover):
        try:
            return task()
        except LogglyError as e:
            raise e
        except Exception as e:
            self.log_exception(tag, e)
            return recover()

    def swallow(self, tag: str, task):
        def empty_recover():
            return None

        self.capture(tag, task, empty_recover)

    def log_exception(self, tag: str, exception: Exception):
        try:
            name = type(exception).__name__
            if (tag, name) in self._seen:
                self._logger.debug(f"[{tag}]: {str(exception)}")
                return
            self._seen.add((tag, name))

            stack_trace = traceback.format_exc()
            if stack_trace is None or stack_trace == 'NoneType: None\n':
                stack_trace = str(exception)
            self._logger.warning(f"[{tag}]: {str(exception)} \n {stack_trace}")
            self._logger.increment("internal_exceptions_count", 1, {"tag": tag})
        except BaseException:
            # no-op, best effort
            pass
