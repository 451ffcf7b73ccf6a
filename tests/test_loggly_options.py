import unittest

from loggly import LogglyOptions, LogglyValueError
from loggly.loggly_options import LOGGLY_API


class TestLogglyOptions(unittest.TestCase):

    def test_defaults(self):
        options = LogglyOptions()

        self.assertEqual(options.api, LOGGLY_API)
        self.assertEqual(options.tags, ["bulk"])
        self.assertEqual(options.timeout, 10)
        self.assertEqual(options.queue_size, 32)
        self.assertEqual(options.retry_queue_size, 32)
        self.assertEqual(options.retry_limit, 3)
        self.assertEqual(options.retry_delay, 3.0)
        self.assertIsNone(options.max_in_flight_requests)
        self.assertFalse(options.disable_output_logging)
        self.assertEqual(options.get_logging_copy(), {})

    def test_logging_copy_only_has_changed_values(self):
        options = LogglyOptions(retry_limit=5, max_in_flight_requests=1, disable_output_logging=True,
                                error_callback=print)

        self.assertEqual(
            options.get_logging_copy(),
            {"retry_limit": 5, "max_in_flight_requests": 1, "disable_output_logging": True,
             "error_callback": "SET"},
        )

    def test_invalid_values(self):
        invalid = [
            {"queue_size": 0},
            {"retry_queue_size": -1},
            {"send_thread_limit": 0},
            {"retry_thread_limit": 1.5},
            {"retry_limit": -1},
            {"retry_delay": -0.1},
            {"max_in_flight_requests": 0},
            {"tags": ["a/b"]},
            {"tags": [""]},
        ]
        for kwargs in invalid:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(LogglyValueError):
                    LogglyOptions(**kwargs)

    def test_zero_retry_limit_is_allowed(self):
        self.assertEqual(LogglyOptions(retry_limit=0).retry_limit, 0)


if __name__ == '__main__':
    unittest.main()
