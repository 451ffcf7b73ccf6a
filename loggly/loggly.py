from typing import Any, Optional, Tuple

from .loggly_errors import LogglyValueError
from .loggly_options import LogglyOptions
from .loggly_server import LogglyServer
from .request_result import RequestResult
from .utils import timestamp as _timestamp

__instance: Optional[LogglyServer] = None


def initialize(token: str, options: Optional[LogglyOptions] = None) -> LogglyServer:
    """
    Initializes the global Loggly instance with the given customer token and options

    :param token: The customer token copied from the Loggly console
    :param options: The LogglyOptions object used to configure the client
    :return: The running LogglyServer instance
    """
    global __instance
    if __instance is not None and __instance.is_running():
        __instance.logger.info("Loggly is already initialized.")
        return __instance

    __instance = LogglyServer(token, options)
    __instance.logger.log_process("Initialize", "Done")
    return __instance


def log(payload: Any):
    """
    Ships the payload in the background. Never blocks and never raises on delivery failure

    :param payload: Any JSON serializable value, usually a dict
    """
    get_instance().log(payload)


def log_sync(payload: Any) -> RequestResult:
    """
    Ships the payload on the calling thread

    :param payload: Any JSON serializable value, usually a dict
    :return: The RequestResult of the successful request
    :raises LogglyError: EncodingError, TransportError or StatusError when delivery fails
    """
    return get_instance().log_sync(payload)


def stop(timeout: Optional[float] = None) -> int:
    """
    Stops the global instance, waiting up to timeout seconds for in-flight requests

    :return: The number of requests abandoned
    """
    return get_instance().stop(timeout)


def is_running() -> bool:
    return __instance is not None and __instance.is_running()


def timestamp() -> Tuple[str, str]:
    """
    Generates the key and value of a timestamp field for the current time

    :return: ("timestamp", ISO-8601 UTC time with millisecond precision)
    """
    return _timestamp()


def get_instance() -> LogglyServer:
    """
    Returns the LogglyServer instance used by the module level functions
    """
    if __instance is None:
        raise LogglyValueError("Must call initialize before logging")
    return __instance
