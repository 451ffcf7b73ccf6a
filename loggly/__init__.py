from .interface_observability_client import ObservabilityClient
from .log_request import LogRequest
from .loggly_errors import (
    EncodingError,
    LoggerStoppedWarning,
    LogglyError,
    LogglyValueError,
    RetryLimitExceeded,
    StatusError,
    TransportError,
)
from .loggly_options import LogglyOptions
from .loggly_server import LogglyServer
from .output_logger import LogLevel
from .output_logger import OutputLogger
from .request_result import RequestResult
from .utils import timestamp
from .version import __version__

__all__ = [
    "EncodingError",
    "LogLevel",
    "LogRequest",
    "LoggerStoppedWarning",
    "LogglyError",
    "LogglyOptions",
    "LogglyServer",
    "LogglyValueError",
    "ObservabilityClient",
    "OutputLogger",
    "RequestResult",
    "RetryLimitExceeded",
    "StatusError",
    "TransportError",
    "__version__",
    "timestamp",
]
