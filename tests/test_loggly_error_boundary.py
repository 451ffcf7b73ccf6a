import unittest

from loggly import LogglyOptions, LogglyValueError
from loggly.loggly_error_boundary import _LogglyErrorBoundary
from loggly.loggly_telemetry_logger import create_logger
from mock_output_logger import MockOutputLogger


class TestLogglyErrorBoundary(unittest.TestCase):

    def setUp(self):
        self._output = MockOutputLogger()
        self._boundary = _LogglyErrorBoundary(create_logger(LogglyOptions(custom_logger=self._output)))

    def test_recovers_from_unexpected_errors(self):
        def task():
            raise KeyError("missing")

        result = self._boundary.capture("test_tag", task, lambda: "recovered")

        self.assertEqual(result, "recovered")
        warnings = self._output.logs("warning")
        self.assertEqual(len(warnings), 1)
        self.assertIn("[test_tag]", warnings[0])

    def test_reraises_loggly_errors(self):
        def task():
            raise LogglyValueError("bad input")

        with self.assertRaises(LogglyValueError):
            self._boundary.swallow("test_tag", task)

    def test_returns_task_result(self):
        self.assertEqual(self._boundary.capture("test_tag", lambda: 42, lambda: 0), 42)

    def test_repeated_errors_are_logged_once_at_warning(self):
        def task():
            raise RuntimeError("again")

        for _ in range(3):
            self._boundary.swallow("test_tag", task)

        self.assertEqual(len(self._output.logs("warning")), 1)

    def test_same_error_under_another_tag_is_logged(self):
        self._boundary.log_exception("first_tag", RuntimeError("x"))
        self._boundary.log_exception("second_tag", RuntimeError("x"))

        self.assertEqual(len(self._output.logs("warning")), 2)


if __name__ == '__main__':
    unittest.main()
