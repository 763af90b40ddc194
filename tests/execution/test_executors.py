"""Tests for action executors."""

import pytest
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

from council_app.execution.base import ExecutionStatus
from council_app.execution.http_executor import HttpActionExecutor
from council_app.execution.local_executor import LocalActionExecutor
from council_app.ledger.models import ActionTarget


class TestLocalActionExecutor:
    """Test LocalActionExecutor dispatch."""

    def test_success(self):
        received = []
        executor = LocalActionExecutor()
        executor.register("treasury.payout", lambda payload: received.append(payload) or True)

        assert executor.execute(ActionTarget("treasury.payout", b"100")) is True
        assert received == [b"100"]
        assert executor.last_result.status == ExecutionStatus.SUCCESS
        assert executor.get_stats() == {"name": "local", "attempt_count": 1, "failure_count": 0}

    def test_handler_reports_failure(self):
        executor = LocalActionExecutor()
        executor.register("treasury.payout", lambda payload: False)

        assert executor.execute(ActionTarget("treasury.payout")) is False
        assert executor.last_result.message == "Handler reported failure"

    def test_unknown_address_fails(self):
        executor = LocalActionExecutor()

        assert executor.execute(ActionTarget("nowhere")) is False
        assert executor.get_stats()["failure_count"] == 1

    def test_handler_exception_fails(self):
        def broken(payload):
            raise ValueError("bad payload")

        executor = LocalActionExecutor()
        executor.register("treasury.payout", broken)

        assert executor.execute(ActionTarget("treasury.payout")) is False
        assert isinstance(executor.last_result.error, ValueError)

    def test_reset_stats(self):
        executor = LocalActionExecutor()
        executor.execute(ActionTarget("nowhere"))

        executor.reset_stats()

        assert executor.get_stats()["attempt_count"] == 0
        assert executor.last_result is None


class TestHttpActionExecutor:
    """Test HttpActionExecutor."""

    def _response(self, status):
        response = MagicMock()
        response.status = status
        response.__enter__.return_value = response
        return response

    @patch("council_app.execution.http_executor.urlopen")
    def test_2xx_is_success(self, mock_urlopen):
        mock_urlopen.return_value = self._response(204)
        executor = HttpActionExecutor(timeout_seconds=5, headers={"X-Council": "1"})

        assert executor.execute(ActionTarget("https://ops.example/rotate", b"key")) is True

        request = mock_urlopen.call_args[0][0]
        assert request.get_method() == "POST"
        assert request.data == b"key"
        assert request.get_header("X-council") == "1"
        assert mock_urlopen.call_args[1]["timeout"] == 5

    @patch("council_app.execution.http_executor.urlopen")
    def test_http_error_fails(self, mock_urlopen):
        mock_urlopen.side_effect = HTTPError(
            "https://ops.example/rotate", 500, "Server Error", {}, None
        )
        executor = HttpActionExecutor()

        assert executor.execute(ActionTarget("https://ops.example/rotate")) is False
        assert executor.last_result.message.startswith("HTTP 500")

    @patch("council_app.execution.http_executor.urlopen")
    def test_network_error_fails(self, mock_urlopen):
        mock_urlopen.side_effect = URLError("connection refused")
        executor = HttpActionExecutor()

        assert executor.execute(ActionTarget("https://ops.example/rotate")) is False

    @patch("council_app.execution.http_executor.urlopen")
    def test_invalid_url_not_requested(self, mock_urlopen):
        executor = HttpActionExecutor()

        assert executor.execute(ActionTarget("treasury.payout")) is False
        mock_urlopen.assert_not_called()
