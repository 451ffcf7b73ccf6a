import json
import threading
import time
from contextlib import nullcontext
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from .loggly_errors import EncodingError, StatusError, TransportError
from .loggly_options import LogglyOptions
from .loggly_telemetry_logger import LogglyTelemetryLogger
from .request_result import RequestResult

BULK_CONTENT_TYPE = "text/plain"


class HttpWorker:
    """
    Single attempt sender shared by the sync and async paths.

    Encodes one payload, POSTs it to the bulk endpoint and classifies the outcome.
    Retrying is left to the caller.
    """

    def __init__(self, endpoint_url: str, options: LogglyOptions, logger: LogglyTelemetryLogger):
        self._endpoint_url = endpoint_url
        self._logger = logger
        self._req_timeout = options.timeout
        self._in_flight = (
            threading.BoundedSemaphore(options.max_in_flight_requests)
            if options.max_in_flight_requests is not None
            else None
        )
        self._request_session = requests.Session()
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=options.send_thread_limit)
        self._request_session.mount("https://", adapter)
        self._request_session.mount("http://", adapter)

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    def log_event(self, payload: Any) -> RequestResult:
        data = self._prepare_payload(payload)
        if data is None:
            return RequestResult(
                success=False,
                status_code=None,
                error=EncodingError("Failed to JSON encode payload. Is the input JSON serializable?"),
            )

        with self._in_flight if self._in_flight is not None else nullcontext():
            start = time.monotonic()
            result = self._post(data)
            self._logger.distribution("request_latency_ms", (time.monotonic() - start) * 1000,
                                      {"success": result.success})

        if result.success:
            self._logger.increment("log_event.sent")
        else:
            self._logger.increment("log_event.failed")
        return result

    def shutdown(self) -> None:
        self._request_session.close()

    def _post(self, data: bytes) -> RequestResult:
        try:
            with self._request_session.request(
                "POST",
                self._endpoint_url,
                data=data,
                headers={"Content-Type": BULK_CONTENT_TYPE},
                timeout=self._req_timeout,
            ) as response:
                if self._is_success_code(response.status_code):
                    return RequestResult(
                        success=True,
                        status_code=response.status_code,
                        headers=response.headers,
                    )
                body = self._read_body(response)
                if body:
                    self._logger.warning(f"Loggly returned http status {response.status_code}: {body}")
                else:
                    self._logger.warning(f"Loggly returned http status {response.status_code}")
                return RequestResult(
                    success=False,
                    status_code=response.status_code,
                    text=body,
                    headers=response.headers,
                    error=StatusError(response.status_code, body),
                    retryable=True,
                )
        except (requests.exceptions.RequestException, OSError) as e:
            self._logger.warning(f"Loggly request to {self._endpoint_url} failed with error {e}")
            return RequestResult(
                success=False,
                status_code=None,
                error=TransportError(str(e), e),
                retryable=True,
            )

    def _prepare_payload(self, payload: Any) -> Optional[bytes]:
        try:
            return json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError, RecursionError) as e:
            self._logger.warning(
                f"Dropping request to {self._endpoint_url}. Failed to JSON encode payload. "
                f"Are you sure the input is JSON serializable? {type(e).__name__}: {e.args}"
            )
            return None

    @staticmethod
    def _read_body(response) -> Optional[str]:
        try:
            return response.text
        except Exception:
            return None

    @staticmethod
    def _is_success_code(status_code: Optional[int]) -> bool:
        if status_code is None:
            return False
        return 200 <= status_code < 300
