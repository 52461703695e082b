"""
Unit tests for the request timing middleware.

This test suite covers:
- Request/response processing and metric reporting
- Header injection
- Slow request detection
- Error propagation
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from lanmic_site.server.middleware.request_timing_middleware import RequestTimingMiddleware

MODULE = "lanmic_site.server.middleware.request_timing_middleware"


@pytest.fixture
def mock_request():
    request = AsyncMock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/blog"
    request.state = MagicMock()
    return request


class TestRequestTimingMiddlewareDispatch:
    @pytest.mark.asyncio
    async def test_processes_successful_request(self, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = RequestTimingMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        mock_log.assert_called_once()
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/blog"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_adds_process_time_header(self, mock_request):
        async def call_next(request):
            return Response(content="ok")

        middleware = RequestTimingMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request"):
            response = await middleware.dispatch(mock_request, call_next)

        assert float(response.headers["X-Process-Time"]) >= 0

    @pytest.mark.asyncio
    async def test_warns_on_slow_request(self, mock_request):
        async def call_next(request):
            return Response(content="ok")

        middleware = RequestTimingMiddleware(app=AsyncMock(), slow_threshold_ms=-1)
        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger") as mock_logger:
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_no_warning_for_fast_request(self, mock_request):
        async def call_next(request):
            return Response(content="ok")

        middleware = RequestTimingMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger") as mock_logger:
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_logs_and_reraises_errors(self, mock_request):
        async def call_next(request):
            raise RuntimeError("boom")

        middleware = RequestTimingMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request") as mock_log, patch(f"{MODULE}.logger") as mock_logger:
            with pytest.raises(RuntimeError, match="boom"):
                await middleware.dispatch(mock_request, call_next)

        mock_logger.error.assert_called_once()
        assert mock_log.call_args[1]["status_code"] == 500
