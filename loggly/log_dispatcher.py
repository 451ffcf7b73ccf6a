import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional, Set

from .http_worker import HttpWorker
from .log_request import LogRequest
from .loggly_error_boundary import _LogglyErrorBoundary
from .loggly_errors import LoggerStoppedWarning
from .loggly_options import LogglyOptions
from .loggly_telemetry_logger import LogglyTelemetryLogger
from .retry_scheduler import RetryScheduler

OVERFLOW_PUT_INTERVAL_SECONDS = 0.1


class LogDispatcher:
    """
    The async sender loop.

    One background thread waits on three sources: new submissions, failed
    requests ready for the retry scheduler, and the shutdown signal. Every put
    onto either queue releases ``_ready`` once, and so does shutdown, so the
    loop only wakes up when there is something to hand out. Sends and retry
    backoffs run on bounded thread pools; the loop itself never touches the
    network.
    """

    def __init__(self, worker: HttpWorker, options: LogglyOptions, shutdown_event: threading.Event,
                 error_boundary: _LogglyErrorBoundary, logger: LogglyTelemetryLogger):
        self._worker = worker
        self._logger = logger
        self._shutdown_event = shutdown_event
        self._error_boundary = error_boundary
        self._submissions: "queue.Queue[LogRequest]" = queue.Queue(maxsize=options.queue_size)
        self._retries: "queue.Queue[LogRequest]" = queue.Queue(maxsize=options.retry_queue_size)
        self._ready = threading.Semaphore(0)
        self._lock = threading.Lock()
        self._tasks: Set[Future] = set()
        self._abandoned_count = 0
        self._send_executor = ThreadPoolExecutor(
            max_workers=options.send_thread_limit, thread_name_prefix="Loggly::sender")
        self._retry_executor = ThreadPoolExecutor(
            max_workers=options.retry_thread_limit, thread_name_prefix="Loggly::retry")
        # blocking puts for full queues, so callers never wait on them
        self._overflow_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="Loggly::overflow")
        self._retry_scheduler = RetryScheduler(options, self.submit, self._abandon, shutdown_event, logger)
        self._loop_thread = threading.Thread(target=self._run, name="Loggly::async_sender_loop", daemon=True)
        self._loop_thread.start()

    def is_alive(self) -> bool:
        return self._loop_thread.is_alive()

    def submit(self, request: LogRequest):
        self._put(self._submissions, request)

    def pending_count(self) -> int:
        return self._submissions.qsize() + self._retries.qsize()

    def in_flight_count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def shutdown(self, timeout: Optional[float] = None) -> int:
        """
        Stops the loop, flushes queued submissions to the send pool and waits up
        to ``timeout`` seconds for in-flight sends and retries. Retries still in
        their backoff are abandoned rather than waited out.

        :return: the number of requests abandoned
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        self._shutdown_event.set()
        self._ready.release()
        self._loop_thread.join(self._remaining(deadline))

        with self._lock:
            pending = list(self._tasks)
        _, not_done = wait(pending, timeout=self._remaining(deadline))
        for future in not_done:
            future.cancel()

        for leftover in (self._drain(self._submissions) + self._drain(self._retries)):
            self._abandon(leftover)

        for executor in (self._overflow_executor, self._retry_executor, self._send_executor):
            executor.shutdown(wait=False)

        with self._lock:
            return self._abandoned_count + len(not_done)

    def _run(self):
        self._logger.log_process("Dispatcher", "Starting async sender loop...")
        while True:
            self._ready.acquire()
            if self._shutdown_event.is_set():
                break
            try:
                self._dispatch_next()
            except Exception as e:
                self._error_boundary.log_exception("log_dispatcher:dispatch", e)

        for request in self._drain(self._submissions):
            try:
                self._track(self._send_executor.submit(self._send, request))
            except RuntimeError:
                self._abandon(request)
        self._logger.log_process("Dispatcher", "Stopped async sender loop")

    def _dispatch_next(self):
        try:
            failed = self._retries.get_nowait()
        except queue.Empty:
            pass
        else:
            self._track(self._retry_executor.submit(self._retry, failed))
            return

        try:
            request = self._submissions.get_nowait()
        except queue.Empty:
            return
        self._track(self._send_executor.submit(self._send, request))

    def _send(self, request: LogRequest):
        try:
            result = self._worker.log_event(request.payload)
        except Exception as e:
            self._error_boundary.log_exception("log_dispatcher:send", e)
            return
        if result.success:
            return
        if not result.retryable:
            self._logger.log_dropped_request("encoding", result.error)
            return
        if self._shutdown_event.is_set():
            self._abandon(request)
            return
        # keep the current retry count, the scheduler is the only place that bumps it
        self._put(self._retries, request)

    def _retry(self, request: LogRequest):
        try:
            self._retry_scheduler.handle_failed_request(request)
        except Exception as e:
            self._error_boundary.log_exception("log_dispatcher:retry", e)

    def _put(self, target: "queue.Queue[LogRequest]", request: LogRequest):
        try:
            target.put_nowait(request)
        except queue.Full:
            try:
                self._track(self._overflow_executor.submit(self._blocking_put, target, request))
            except RuntimeError:
                # executor already shut down
                self._abandon(request)
            return
        self._ready.release()

    def _blocking_put(self, target: "queue.Queue[LogRequest]", request: LogRequest):
        while not self._shutdown_event.is_set():
            try:
                target.put(request, timeout=OVERFLOW_PUT_INTERVAL_SECONDS)
            except queue.Full:
                continue
            self._ready.release()
            return
        self._abandon(request)

    def _abandon(self, request: LogRequest):
        with self._lock:
            self._abandoned_count += 1
        self._logger.log_process("Dispatcher", f"Abandoning request on shutdown (retries {request.retries})")
        self._logger.log_dropped_request("shutdown", LoggerStoppedWarning("Request abandoned on shutdown"))

    def _track(self, future: Future):
        with self._lock:
            self._tasks.add(future)
        future.add_done_callback(self._untrack)

    def _untrack(self, future: Future):
        with self._lock:
            self._tasks.discard(future)

    @staticmethod
    def _drain(source: "queue.Queue[LogRequest]"):
        drained = []
        while True:
            try:
                drained.append(source.get_nowait())
            except queue.Empty:
                return drained

    @staticmethod
    def _remaining(deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())
