"""Unit tests for the request id and process time middleware."""

import unittest
import uuid
from unittest.mock import patch

from django.http import HttpRequest, HttpResponse

from core.constants import PROCESS_TIME_HEADER, REQUEST_ID_HEADER
from core.logging.context import get_request_id
from core.middleware import ProcessTimeMiddleware, RequestIDMiddleware


def _request(headers=None):
    request = HttpRequest()
    request.method = "POST"
    request.path = "/api/v1/notifications"
    for key, value in (headers or {}).items():
        request.META[f"HTTP_{key.upper().replace('-', '_')}"] = value
    return request


class TestRequestIDMiddleware(unittest.TestCase):
    """Test cases for RequestIDMiddleware."""

    def setUp(self):
        """Record the request id seen while the view runs."""
        self.seen_ids = []

        def get_response(request):
            self.seen_ids.append(get_request_id())
            return HttpResponse(status=201)

        self.middleware = RequestIDMiddleware(get_response)

    def test_generates_uuid(self):
        """Test a UUID4 is generated when the client sends none."""
        request = _request()

        response = self.middleware(request)

        self.assertEqual(uuid.UUID(request.request_id).version, 4)
        self.assertEqual(response[REQUEST_ID_HEADER], request.request_id)

    def test_reuses_client_request_id(self):
        """Test the caller's X-Request-ID is propagated."""
        response = self.middleware(_request({REQUEST_ID_HEADER: "order-flow-17"}))

        self.assertEqual(response[REQUEST_ID_HEADER], "order-flow-17")
        self.assertEqual(self.seen_ids, ["order-flow-17"])

    def test_context_cleared_after_response(self):
        """Test the id is only visible while the request is handled."""
        self.middleware(_request())

        self.assertIsNotNone(self.seen_ids[0])
        self.assertIsNone(get_request_id())

    def test_context_cleared_when_view_raises(self):
        """Test the id does not leak into the next request after an error."""

        def failing_response(request):
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            RequestIDMiddleware(failing_response)(_request({REQUEST_ID_HEADER: "r-1"}))

        self.assertIsNone(get_request_id())


class TestProcessTimeMiddleware(unittest.TestCase):
    """Test cases for ProcessTimeMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.middleware = ProcessTimeMiddleware(lambda request: HttpResponse("OK"))

    def test_header_has_microsecond_precision(self):
        """Test the duration is reported in seconds with six decimals."""
        response = self.middleware(_request())

        seconds, _, fraction = response[PROCESS_TIME_HEADER].partition(".")
        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0)
        self.assertTrue(seconds.isdigit())
        self.assertEqual(len(fraction), 6)

    @patch("core.middleware.process_time.logger")
    @patch("core.middleware.process_time.time.perf_counter", side_effect=[10.0, 12.5])
    def test_logs_slow_requests(self, _mock_perf_counter, mock_logger):
        """Test requests over the threshold are logged as warnings."""
        response = self.middleware(_request())

        self.assertEqual(response[PROCESS_TIME_HEADER], "2.500000")
        mock_logger.warning.assert_called_once()
        self.assertEqual(mock_logger.warning.call_args.args[0], "slow_request")
        self.assertEqual(mock_logger.warning.call_args.kwargs["duration_seconds"], 2.5)

    @patch("core.middleware.process_time.logger")
    @patch("core.middleware.process_time.time.perf_counter", side_effect=[10.0, 10.2])
    def test_fast_requests_not_logged(self, _mock_perf_counter, mock_logger):
        """Test requests under the threshold are not logged."""
        self.middleware(_request())

        mock_logger.warning.assert_not_called()


if __name__ == "__main__":
    unittest.main()
