from typing import Optional


class LogglyError(Exception):
    pass


class LogglyValueError(LogglyError, ValueError):
    pass


class EncodingError(LogglyError):
    """The payload could not be JSON encoded. Never retried."""


class TransportError(LogglyError):
    """Connection, timeout or DNS failure talking to the endpoint."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class StatusError(LogglyError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        message = f"Loggly returned http status {status_code}"
        if body:
            message += f": {body}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class LoggerStoppedWarning(LogglyError):
    pass


class RetryLimitExceeded(LogglyError):
    def __init__(self, retries: int):
        super().__init__(f"Dropping request after {retries} retries")
        self.retries = retries
