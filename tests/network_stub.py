import json
import re
import threading
import time
from typing import Callable, Optional, Union
from urllib.parse import urlparse, ParseResult


class NetworkStub:
    host: str

    class StubResponse:
        def __init__(self, status, data=None, headers=None, url=None):
            if headers is None:
                headers = {}

            self.status_code = status
            self.ok = 200 <= status < 300
            self.headers = headers
            self.text = data
            self.url = url or "http://localhost"

        def json(self):
            return json.loads(self.text)

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_value, traceback):
            return False

    class RecordedRequest:
        def __init__(self, method: str, url: str, data, headers, at: float):
            self.method = method
            self.url = url
            self.data = data
            self.headers = headers or {}
            self.at = at

        def json(self):
            body = self.data.decode("utf-8") if isinstance(self.data, bytes) else self.data
            return json.loads(body)

    def __init__(self, host: str):
        self.host = host
        self._stubs = {}
        self._lock = threading.Lock()
        self._requests = []

    def reset(self):
        with self._lock:
            self._stubs = {}
            self._requests = []

    @property
    def requests(self):
        with self._lock:
            return list(self._requests)

    def request_count(self) -> int:
        with self._lock:
            return len(self._requests)

    def stub_request_with_value(self, path, response_code: int, response_body: Union[dict, str] = "",
                                headers: Optional[dict] = None):
        if not isinstance(response_body, dict) and not isinstance(response_body, str):
            raise TypeError("Must provide a dictionary or string")

        self._stubs[path] = {
            "response_code": response_code,
            "response_body": response_body,
            "headers": headers or {},
        }

    def stub_request_with_function(self, path, response_code: Union[int, Callable[[ParseResult, dict], int]],
                                   response_func: Callable[..., object], headers: Optional[dict] = None):
        if not callable(response_func):
            raise TypeError("Must provide a function")

        self._stubs[path] = {
            "response_code": response_code,
            "response_func": response_func,
            "headers": headers or {},
        }

    def mock(*args, **kwargs):
        instance: NetworkStub = args[0]
        method: str = args[1]
        url: ParseResult = urlparse(args[2])
        request_host = f"{url.scheme}://{url.hostname}"

        if request_host != instance.host:
            return NetworkStub.StubResponse(404)

        with instance._lock:
            instance._requests.append(NetworkStub.RecordedRequest(
                method, args[2], kwargs.get("data"), kwargs.get("headers"), time.monotonic()))

        for path, stub_data in list(instance._stubs.items()):
            if re.search(f".*{path}", url.path):
                response_body = stub_data.get("response_body")
                headers = stub_data.get("headers", {})

                if "response_func" in stub_data:
                    response_body = stub_data["response_func"](url, **kwargs)

                response_code = stub_data.get("response_code")
                if callable(response_code):
                    response_code = response_code(url, kwargs)

                if isinstance(response_body, dict):
                    response_body = json.dumps(response_body)

                return NetworkStub.StubResponse(response_code, response_body, headers, args[2])

        return NetworkStub.StubResponse(404)
