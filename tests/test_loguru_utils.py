"""
Tests for the structured logging wrapper.
"""

import pytest
from loguru import logger

from anthropic_light.utils.loguru_utils import LoguruLogger


@pytest.fixture
def records():
    """Capture records emitted by the package while it is enabled."""
    captured = []
    logger.enable("anthropic_light")
    sink_id = logger.add(captured.append, level="DEBUG", format="{message}")
    yield captured
    logger.remove(sink_id)
    logger.disable("anthropic_light")


class TestLoguruLogger:
    """Test cases for LoguruLogger."""

    def test_silent_by_default(self):
        """The package emits nothing until logging is enabled."""
        captured = []
        sink_id = logger.add(captured.append, level="DEBUG")
        try:
            LoguruLogger("test").warning("hidden")
        finally:
            logger.remove(sink_id)

        assert captured == []

    @pytest.mark.parametrize("method, level", [
        ("debug", "DEBUG"),
        ("warning", "WARNING"),
    ])
    def test_levels_and_context(self, records, method, level):
        """Each level method binds the component and extra fields."""
        getattr(LoguruLogger("client"), method)("hello", request_id="r1")

        record = records[-1].record
        assert record["level"].name == level
        assert record["message"] == "hello"
        assert record["extra"]["component"] == "client"
        assert record["extra"]["request_id"] == "r1"

    def test_timer(self):
        """Timers report non-negative elapsed time once."""
        log = LoguruLogger()
        timer_id = log.start_timer("op")

        assert timer_id.startswith("op_")
        assert log.stop_timer(timer_id) >= 0.0
        assert log.stop_timer(timer_id) == 0.0

    def test_unknown_timer_warns(self, records):
        """Stopping an unknown timer logs a warning."""
        assert LoguruLogger().stop_timer("missing") == 0.0
        assert "Timer not found: missing" in records[-1].record["message"]

    def test_api_response_levels(self, records):
        """Error statuses are logged as warnings, successes as debug."""
        log = LoguruLogger()

        log.log_api_response("POST", "https://api.test/v1/messages", 200, 0.1)
        log.log_api_response("POST", "https://api.test/v1/messages", 529, 0.1)

        assert [r.record["level"].name for r in records[-2:]] == ["DEBUG", "WARNING"]
        assert records[-1].record["extra"]["status_code"] == 529
        assert records[-1].record["extra"]["path"] == "https://api.test/v1/messages"
