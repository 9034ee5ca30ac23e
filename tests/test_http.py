# ABOUTME: Tests for the retrying httpx client factory.
# ABOUTME: Validates which failures count as transient and that the client is usable.

import httpx
import pytest

from weather_vue.http import _is_transient, create_http_client


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://test")
    return httpx.HTTPStatusError(str(code), request=request, response=httpx.Response(code, request=request))


class TestTransientErrors:
    def test_retries_rate_limits_and_server_errors(self):
        """429 and 5xx responses and connection failures are retried.

        Implementation: Classifies status errors and a ConnectError.
        Passing implies: Temporary provider trouble does not fail the search immediately.
        """
        assert _is_transient(_status_error(429))
        assert _is_transient(_status_error(503))
        assert _is_transient(httpx.ConnectError("boom"))

    def test_client_errors_are_not_retried(self):
        """4xx responses other than 429 come straight back.

        Implementation: Classifies 400 and 404 status errors.
        Passing implies: Bad queries surface their provider message without delay.
        """
        assert not _is_transient(_status_error(400))
        assert not _is_transient(_status_error(404))


class TestCreateHttpClient:
    @pytest.mark.asyncio
    async def test_returns_async_client(self):
        """create_http_client builds an httpx.AsyncClient.

        Implementation: Creates and closes a client.
        Passing implies: The retry transport is accepted by httpx.
        """
        client = create_http_client()
        assert isinstance(client, httpx.AsyncClient)
        await client.aclose()
