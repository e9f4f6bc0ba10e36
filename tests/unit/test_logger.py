import logging
import sys
from unittest.mock import patch

from intake.logging.logger import Log


class TestLog:
    def test_configure_writes_to_stderr_once(self) -> None:
        logger = logging.getLogger("intake-test")
        with patch.object(Log, "_logger", logger):
            Log.configure("debug")
            Log.configure("info")
            assert logger.level == logging.INFO
            [handler] = logger.handlers
            assert isinstance(handler, logging.StreamHandler)
            assert handler.stream is sys.stderr
        logger.handlers.clear()

    def test_messages_reach_the_intake_logger(self, caplog) -> None:  # type: ignore[no-untyped-def]
        with caplog.at_level(logging.DEBUG, logger="intake"):
            Log.debug("raw reply")
            Log.warning("fallback to vision")
        assert [r.getMessage() for r in caplog.records if r.name == "intake"] == [
            "raw reply",
            "fallback to vision",
        ]
