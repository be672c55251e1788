import logging
import os
import tempfile
import unittest
from unittest import mock

from hedra.config import LOG_LEVEL_ENV, get_log_level
from hedra.logging_config import setup_logging


class GetLogLevelTest(unittest.TestCase):
    def test_default_without_environment(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_log_level(), logging.INFO)

    def test_level_name_and_number(self):
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "debug"}):
            self.assertEqual(get_log_level(), logging.DEBUG)
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "30"}):
            self.assertEqual(get_log_level(), logging.WARNING)

    def test_unknown_level_falls_back(self):
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "chatty"}):
            self.assertEqual(get_log_level(logging.ERROR), logging.ERROR)


class SetupLoggingTest(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger("hedra")
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(logging.DEBUG)
        logger = setup_logging(logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "hedra.log")
            logger = setup_logging(logging.INFO, log_file=path)
            logging.getLogger("hedra.model.shapes").info("triangle built")
            for handler in logger.handlers:
                handler.flush()
                handler.close()
            logger.handlers.clear()

            with open(path, encoding="utf-8") as f:
                content = f.read()
        self.assertIn("Logging initialized.", content)
        self.assertIn("hedra.model.shapes - INFO - triangle built", content)


if __name__ == "__main__":
    unittest.main()
