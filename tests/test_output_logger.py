import logging
import unittest
from unittest.mock import patch

from loggly import LogLevel, LogglyOptions, OutputLogger
from loggly.loggly_telemetry_logger import TELEMETRY_PREFIX, create_logger
from loggly.output_logger import sanitize
from mock_output_logger import MockOutputLogger


class TestOutputLogger(unittest.TestCase):

    def test_sanitize_masks_token_in_endpoint(self):
        message = "Loggly request to https://logs-01.loggly.com/bulk/abc-123-def/tag/bulk/ failed"

        self.assertEqual(
            sanitize(message),
            "Loggly request to https://logs-01.loggly.com/bulk/****/tag/bulk/ failed",
        )

    def test_sanitize_leaves_other_text_alone(self):
        message = "Loggly returned http status 503: Service Unavailable"

        self.assertEqual(sanitize(message), message)

    def test_set_log_level(self):
        logger = MockOutputLogger()
        logger.set_log_level(LogLevel.WARNING)

        logger.info("hidden")
        logger.warning("shown")

        self.assertEqual(logger.logs("info"), [])
        self.assertEqual(logger.logs("warning"), ["shown"])

    def test_log_process_is_debug(self):
        logger = MockOutputLogger()
        logger.set_log_level(LogLevel.DEBUG)

        logger.log_process("Dispatcher", "Starting async sender loop...")

        self.assertEqual(logger.logs("debug"), ["Dispatcher: Starting async sender loop..."])

    def test_logging_never_raises(self):
        logger = OutputLogger("loggly.test")

        class Unprintable:
            def __str__(self):
                raise RuntimeError("boom")

        logger.warning(Unprintable())
        logger.error("%s", Unprintable())

    def test_output_goes_through_standard_logging(self):
        logger = OutputLogger("loggly.test.capture")

        with self.assertLogs("loggly.test.capture", level=logging.WARNING) as captured:
            logger.warning("request to https://x/bulk/secret-token/tag/bulk/ failed")

        self.assertEqual(len(captured.output), 1)
        self.assertNotIn("secret-token", captured.output[0])

    def test_disabled_logger_emits_nothing(self):
        logger = OutputLogger("loggly.test.disabled", disabled=True)

        with patch.object(logging.getLogger("loggly.test.disabled"), "warning") as warning:
            logger.warning("never shown")

        warning.assert_not_called()

    def test_disable_output_logging_option(self):
        logger = create_logger(LogglyOptions(disable_output_logging=True))

        with patch.object(logging.getLogger(TELEMETRY_PREFIX), "warning") as warning:
            logger.warning("never shown")

        warning.assert_not_called()


if __name__ == '__main__':
    unittest.main()
